"""Savings advice via the OpenAI Responses API.

Summarizes income and spending per category and asks the model for a short,
encouraging tip in Bahasa Indonesia. Advice is read-only; nothing is written
to the ledger.
"""

import os
from typing import Any, Optional, Sequence

from openai import OpenAI

from dompet.domain.entities import CategoryTotal, Transaction, TransactionType
from dompet.domain.errors import AdviceError
from dompet.domain.summary import totals_by_category
from dompet.logging_setup import get_logger

_logger = get_logger("dompet.advisor")

_DEFAULT_MODEL: str = "gpt-4.1-mini"

NO_DATA_REPLY: str = (
    "Belum ada data transaksi untuk dianalisis. "
    "Coba tambahkan beberapa transaksi terlebih dahulu ya!"
)
NO_ADVICE_REPLY: str = "Tidak dapat menghasilkan saran saat ini. Silakan coba lagi nanti."

_INSTRUCTIONS = """You are a friendly and encouraging financial advisor for users in Indonesia.
Your response MUST be in Bahasa Indonesia.

Analyze the user's income and spending per category:
1. Identify the top 2-3 spending categories.
2. Give 1-2 specific, simple and actionable tips to save money based on those categories.
   For example, if "Makanan & Minuman" is high, suggest: "Anda bisa coba mengurangi jajan di luar dan membawa bekal."
3. Keep the tone positive and supportive.
4. Answer in plain text, not markdown.
"""


def _create_client() -> OpenAI:
    return OpenAI()


def _plain_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_patterns(totals: Sequence[CategoryTotal], empty_label: str) -> str:
    """Render category totals as ``"category: amount"`` pairs."""
    if not totals:
        return empty_label
    return ", ".join(f"{t.category}: {_plain_number(t.total)}" for t in totals)


def build_advice_prompt(transactions: Sequence[Transaction]) -> str:
    income = totals_by_category(transactions, TransactionType.INCOME)
    spending = totals_by_category(transactions, TransactionType.EXPENSE)
    return (
        f"Pola pemasukan: {format_patterns(income, 'Tidak ada pemasukan')}\n"
        f"Pola pengeluaran: {format_patterns(spending, 'Tidak ada pengeluaran')}"
    )


class SavingsAdvisor:
    """Produces savings tips from recorded transactions."""

    def __init__(self, client: Any = None, model: Optional[str] = None):
        """Initialize savings advisor.

        Args:
            client: OpenAI client; created on first use when omitted
            model: Model name; defaults to DOMPET_ADVISOR_MODEL or a small default
        """
        self._client = client
        self.model = model or os.environ.get("DOMPET_ADVISOR_MODEL") or _DEFAULT_MODEL

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = _create_client()
        return self._client

    def advise(self, transactions: Sequence[Transaction]) -> str:
        """Return savings advice for a set of transactions.

        With no transactions the fixed "no data" reply is returned without
        calling the model. An empty model answer yields the fixed fallback.

        Raises:
            AdviceError: If the service call fails
        """
        if not transactions:
            return NO_DATA_REPLY

        try:
            resp = self.client.responses.create(
                model=self.model,
                instructions=_INSTRUCTIONS,
                input=build_advice_prompt(transactions),
            )
        except Exception as e:  # noqa: BLE001 - any SDK failure means no advice this time
            _logger.warning("advisor:request_failed model=%s error=%s", self.model, e)
            raise AdviceError(f"{NO_ADVICE_REPLY} ({e})") from e

        text = getattr(resp, "output_text", None)
        if not text or not isinstance(text, str) or not text.strip():
            _logger.warning("advisor:empty_output model=%s", self.model)
            return NO_ADVICE_REPLY
        _logger.info("advisor:advised transactions=%d", len(transactions))
        return text.strip()

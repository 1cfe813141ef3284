"""Receipt extraction via the OpenAI Responses API.

Turns a photographed receipt, invoice or salary slip into a transaction
guess the user can review. Extraction never writes to the ledger; saving the
guess goes through ``TransactionService`` like any other draft.
"""

import base64
import json
import os
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from openai import OpenAI

from dompet.domain.entities import TransactionType
from dompet.domain.errors import ExtractionError
from dompet.logging_setup import get_logger
from dompet.utils.date_parser import parse_iso_date

_logger = get_logger("dompet.receipt")

_DEFAULT_MODEL: str = "gpt-4.1-mini"
_FALLBACK_CATEGORY: str = "Lainnya"

_INSTRUCTIONS = """You are a financial assistant expert in analyzing receipts, invoices and salary slips.
Extract one transaction from the image.

Rules:
1. transactionType is "income" for salary slips and money received, "expense" for receipts and invoices.
2. category MUST be one of the listed categories for that transaction type. If unsure use "Lainnya".
3. amount is the final total as a plain number in Rupiah (Rp12.345,50 -> 12345.5; Rp12.000 -> 12000).
4. description is short and clear, such as the store name or "Gaji Bulanan".
5. date is the transaction date as YYYY-MM-DD. If no date is visible use today's date.
6. fundSource is the payment source (e.g. a QRIS payment from an e-wallet) chosen from the listed fund sources, or null if it is not visible.
"""

_RECEIPT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "transactionType": {"type": "string", "enum": ["income", "expense"]},
        "amount": {"type": "number"},
        "date": {"type": "string"},
        "category": {"type": "string"},
        "description": {"type": "string"},
        "fundSource": {"type": ["string", "null"]},
    },
    "required": ["transactionType", "amount", "date", "category", "description", "fundSource"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class ReceiptGuess:
    """Transaction fields guessed from a receipt image."""

    is_income: bool
    amount: float
    category: str
    description: str
    date: date
    source: Optional[str] = None

    @property
    def type(self) -> TransactionType:
        return TransactionType.INCOME if self.is_income else TransactionType.EXPENSE


def _create_client() -> OpenAI:
    return OpenAI()


def _extract_response_json_mapping(resp: Any) -> Mapping[str, Any]:
    text: Optional[str] = getattr(resp, "output_text", None)
    if not text or not isinstance(text, str):
        raise ValueError("Unexpected Responses API shape; unable to locate text output")
    decoded = json.loads(text)
    if not isinstance(decoded, dict):
        raise ValueError("Expected a JSON object in the model output")
    return decoded


def _build_user_prompt(
    income_categories: Sequence[str],
    expense_categories: Sequence[str],
    fund_sources: Sequence[str],
    today: date,
) -> str:
    return (
        f"Today is {today.isoformat()}.\n"
        f"Income categories: {json.dumps(list(income_categories), ensure_ascii=False)}\n"
        f"Expense categories: {json.dumps(list(expense_categories), ensure_ascii=False)}\n"
        f"Fund sources: {json.dumps(list(fund_sources), ensure_ascii=False)}"
    )


class ReceiptExtractor:
    """Extracts transaction guesses from receipt images."""

    def __init__(self, client: Any = None, model: Optional[str] = None):
        """Initialize receipt extractor.

        Args:
            client: OpenAI client; created on first use when omitted
            model: Model name; defaults to DOMPET_RECEIPT_MODEL or a vision-capable default
        """
        self._client = client
        self.model = model or os.environ.get("DOMPET_RECEIPT_MODEL") or _DEFAULT_MODEL

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = _create_client()
        return self._client

    def extract(
        self,
        image_bytes: bytes,
        mime_type: str,
        income_categories: Sequence[str],
        expense_categories: Sequence[str],
        fund_sources: Sequence[str],
        today: Optional[date] = None,
    ) -> ReceiptGuess:
        """Guess a transaction from a receipt image.

        Args:
            image_bytes: Raw image content
            mime_type: Image MIME type (e.g., "image/jpeg")
            income_categories: Category names allowed for income
            expense_categories: Category names allowed for expenses
            fund_sources: Fund source names the model may pick from
            today: Date used when the receipt has no readable date

        Returns:
            ReceiptGuess for the user to review

        Raises:
            ExtractionError: If the service call fails or returns unusable data
        """
        if not image_bytes:
            raise ExtractionError("Receipt image is empty")
        today = today or date.today()
        data_uri = f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"
        text_cfg = {
            "format": {
                "type": "json_schema",
                "name": "receipt_transaction",
                "schema": _RECEIPT_SCHEMA,
                "strict": True,
            }
        }
        user_content = [
            {
                "role": "user",
                "content": [
                    {
                        "type": "input_text",
                        "text": _build_user_prompt(
                            income_categories, expense_categories, fund_sources, today
                        ),
                    },
                    {"type": "input_image", "image_url": data_uri},
                ],
            }
        ]

        try:
            resp = self.client.responses.create(
                model=self.model,
                instructions=_INSTRUCTIONS,
                input=user_content,
                text=text_cfg,
            )
            decoded = _extract_response_json_mapping(resp)
        except Exception as e:  # noqa: BLE001 - any SDK or decoding failure means manual entry
            _logger.warning("receipt:extract_failed model=%s error=%s", self.model, e)
            raise ExtractionError(f"Could not read the receipt: {e}") from e

        guess = self._to_guess(decoded, income_categories, expense_categories, fund_sources, today)
        _logger.info(
            "receipt:extracted type=%s amount=%.2f category=%s",
            guess.type.value,
            guess.amount,
            guess.category,
        )
        return guess

    def _to_guess(
        self,
        decoded: Mapping[str, Any],
        income_categories: Sequence[str],
        expense_categories: Sequence[str],
        fund_sources: Sequence[str],
        today: date,
    ) -> ReceiptGuess:
        try:
            is_income = decoded["transactionType"] == TransactionType.INCOME.value
            amount = float(decoded["amount"])
        except (KeyError, TypeError, ValueError) as e:
            raise ExtractionError(f"Receipt extraction returned incomplete data: {e}") from e
        if not amount > 0:
            raise ExtractionError(f"Receipt extraction returned a non-positive amount: {amount}")

        allowed = income_categories if is_income else expense_categories
        category = str(decoded.get("category") or "")
        if category not in allowed:
            _logger.warning("receipt:unknown_category category=%r", category)
            category = _FALLBACK_CATEGORY

        raw_date = str(decoded.get("date") or "")
        try:
            txn_date = parse_iso_date(raw_date)
        except ValueError:
            _logger.warning("receipt:invalid_date value=%r fallback=today", raw_date)
            txn_date = today

        source = decoded.get("fundSource")
        if source is not None and source not in fund_sources:
            source = None

        return ReceiptGuess(
            is_income=is_income,
            amount=amount,
            category=category,
            description=str(decoded.get("description") or "").strip() or "Transaksi dari struk",
            date=txn_date,
            source=source,
        )

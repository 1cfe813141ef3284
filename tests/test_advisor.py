"""Tests for savings advice."""

from datetime import date
from types import SimpleNamespace

import pytest

from dompet.domain.advisor import NO_ADVICE_REPLY, NO_DATA_REPLY, SavingsAdvisor, build_advice_prompt
from dompet.domain.entities import Transaction, TransactionType
from dompet.domain.errors import AdviceError


class StubResponses:
    def __init__(self, output_text=None, error=None):
        self.output_text = output_text
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output_text=self.output_text)


def stub_client(output_text=None, error=None):
    return SimpleNamespace(responses=StubResponses(output_text=output_text, error=error))


def make_txn(txn_type, amount, category):
    return Transaction(
        id=1,
        type=txn_type,
        amount=amount,
        date=date(2024, 3, 1),
        category=category,
        fund_source="Tunai",
        description="test",
    )


TRANSACTIONS = [
    make_txn(TransactionType.INCOME, 5_000_000, "Gaji"),
    make_txn(TransactionType.EXPENSE, 1_200_000.5, "Makanan & Minuman"),
    make_txn(TransactionType.EXPENSE, 300_000, "Transportasi"),
]


def test_no_transactions_skips_the_model():
    client = stub_client(output_text="unused")
    assert SavingsAdvisor(client=client).advise([]) == NO_DATA_REPLY
    assert client.responses.requests == []


def test_advise_sends_category_patterns():
    client = stub_client(output_text="  Coba bawa bekal ke kantor.  ")
    advice = SavingsAdvisor(client=client, model="test-model").advise(TRANSACTIONS)
    assert advice == "Coba bawa bekal ke kantor."

    [request] = client.responses.requests
    assert request["model"] == "test-model"
    assert "Bahasa Indonesia" in request["instructions"]
    assert "Pola pemasukan: Gaji: 5000000" in request["input"]
    assert "Pola pengeluaran: Makanan & Minuman: 1200000.5, Transportasi: 300000" in request["input"]


def test_prompt_without_income():
    prompt = build_advice_prompt([make_txn(TransactionType.EXPENSE, 10, "Belanja")])
    assert "Pola pemasukan: Tidak ada pemasukan" in prompt
    assert "Pola pengeluaran: Belanja: 10" in prompt


@pytest.mark.parametrize("output_text", [None, "", "   "])
def test_empty_output_falls_back(output_text):
    advisor = SavingsAdvisor(client=stub_client(output_text=output_text))
    assert advisor.advise(TRANSACTIONS) == NO_ADVICE_REPLY


def test_service_failure_raises():
    advisor = SavingsAdvisor(client=stub_client(error=RuntimeError("rate limited")))
    with pytest.raises(AdviceError, match="rate limited"):
        advisor.advise(TRANSACTIONS)


def test_model_from_environment(monkeypatch):
    monkeypatch.setenv("DOMPET_ADVISOR_MODEL", "env-model")
    assert SavingsAdvisor(client=stub_client()).model == "env-model"

"""Tests for receipt extraction."""

import base64
import json
from datetime import date
from types import SimpleNamespace

import pytest

from dompet.domain.entities import TransactionType
from dompet.domain.errors import ExtractionError
from dompet.domain.receipt import ReceiptExtractor

INCOME = ["Gaji", "Bonus", "Lainnya"]
EXPENSE = ["Makanan & Minuman", "Belanja", "Lainnya"]
SOURCES = ["Tunai", "Dompet Digital"]
TODAY = date(2024, 5, 20)


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


def stub_client(payload=None, error=None, raw=None):
    text = raw if raw is not None else json.dumps(payload)
    return SimpleNamespace(responses=StubResponses(output_text=text, error=error))


def extract(client, image=b"jpeg-bytes"):
    return ReceiptExtractor(client=client, model="test-model").extract(
        image, "image/jpeg", INCOME, EXPENSE, SOURCES, today=TODAY
    )


def payload(**overrides):
    data = {
        "transactionType": "expense",
        "amount": 45500,
        "date": "2024-05-18",
        "category": "Belanja",
        "description": "Indomaret",
        "fundSource": "Dompet Digital",
    }
    data.update(overrides)
    return data


def test_extract_expense():
    client = stub_client(payload())
    guess = extract(client)

    assert guess.type is TransactionType.EXPENSE
    assert guess.amount == 45500.0
    assert guess.date == date(2024, 5, 18)
    assert guess.category == "Belanja"
    assert guess.description == "Indomaret"
    assert guess.source == "Dompet Digital"


def test_request_shape():
    client = stub_client(payload())
    extract(client, image=b"abc")

    [request] = client.responses.requests
    assert request["model"] == "test-model"
    assert request["text"]["format"]["type"] == "json_schema"
    assert request["text"]["format"]["strict"] is True
    content = request["input"][0]["content"]
    assert "Belanja" in content[0]["text"]
    assert "2024-05-20" in content[0]["text"]
    expected_uri = "data:image/jpeg;base64," + base64.b64encode(b"abc").decode("ascii")
    assert content[1] == {"type": "input_image", "image_url": expected_uri}


def test_extract_salary_slip():
    guess = extract(
        stub_client(payload(transactionType="income", amount=8000000, category="Gaji", fundSource=None))
    )
    assert guess.is_income
    assert guess.type is TransactionType.INCOME
    assert guess.source is None


def test_category_outside_list_falls_back():
    # An expense category is not valid for income
    guess = extract(stub_client(payload(transactionType="income", category="Belanja")))
    assert guess.category == "Lainnya"


def test_invalid_date_falls_back_to_today():
    guess = extract(stub_client(payload(date="18/05/2024")))
    assert guess.date == TODAY


def test_unknown_fund_source_dropped():
    guess = extract(stub_client(payload(fundSource="OVO")))
    assert guess.source is None


def test_blank_description_gets_default():
    guess = extract(stub_client(payload(description="  ")))
    assert guess.description == "Transaksi dari struk"


@pytest.mark.parametrize(
    "client",
    [
        stub_client(error=RuntimeError("rate limited")),
        stub_client(raw="not json"),
        stub_client(raw=""),
        stub_client(raw="[1, 2]"),
        stub_client(payload(amount=0)),
        stub_client(payload(amount="banyak")),
        stub_client({"transactionType": "expense"}),
    ],
)
def test_unusable_response_raises(client):
    with pytest.raises(ExtractionError):
        extract(client)


def test_empty_image_rejected():
    client = stub_client(payload())
    with pytest.raises(ExtractionError):
        extract(client, image=b"")
    assert client.responses.requests == []


def test_model_from_environment(monkeypatch):
    monkeypatch.setenv("DOMPET_RECEIPT_MODEL", "env-model")
    assert ReceiptExtractor(client=object()).model == "env-model"

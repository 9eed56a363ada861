"""Tests for request and response models."""

import pytest

from relaybridge.models import Quote, QuoteRequest, StatusResult, TransferRequest

from conftest import RECIPIENT, SAMPLE_QUOTE, TEST_ADDRESS, USDC_BASE_SEPOLIA, USDC_SEPOLIA


def make_request(**overrides) -> QuoteRequest:
    params = dict(
        user=TEST_ADDRESS,
        origin_chain_id=11155111,
        destination_chain_id=84532,
        origin_currency=USDC_SEPOLIA,
        destination_currency=USDC_BASE_SEPOLIA,
        recipient=RECIPIENT,
        amount="1700000",
    )
    params.update(overrides)
    return QuoteRequest(**params)


class TestQuoteRequest:
    """Tests for QuoteRequest."""

    def test_defaults(self):
        body = make_request().to_dict()

        assert body["tradeType"] == "EXACT_INPUT"
        assert body["referrer"] == "relay.link"
        assert body["useExternalLiquidity"] is False
        assert body["useDepositAddress"] is False
        assert body["topupGas"] is False
        assert "refundTo" not in body

    def test_refund_to(self):
        body = make_request(refund_to=TEST_ADDRESS).to_dict()

        assert body["refundTo"] == TEST_ADDRESS

    def test_amount_must_be_smallest_units(self):
        with pytest.raises(ValueError):
            make_request(amount="1.5")

    def test_int_amount_is_stringified(self):
        assert make_request(amount=1700000).amount == "1700000"

    def test_chain_ids_must_be_positive(self):
        with pytest.raises(ValueError):
            make_request(origin_chain_id=0)


class TestQuote:
    """Tests for Quote parsing."""

    def test_parses_steps_and_items(self):
        quote = Quote.from_dict(SAMPLE_QUOTE)

        step = quote.steps[0]
        assert step.id == "deposit"
        assert step.kind == "transaction"
        item = quote.first_item
        assert item.status == "incomplete"
        assert item.data["gas"] == "59745"
        assert item.check.method == "GET"
        assert quote.deposit_address == "0x3e34b27a9bf37d8424e1a58ac7fc4d06914b76b9"
        assert quote.fees == {"relayer": {"amount": "1000"}}
        assert quote.details["currencyOut"]["amountFormatted"] == "1.69"
        assert quote.raw is SAMPLE_QUOTE

    def test_empty_quote(self):
        quote = Quote.from_dict({})

        assert quote.steps == []
        assert quote.first_item is None
        assert quote.request_id is None
        assert quote.check_endpoint is None


class TestStatusAndTransfer:
    """Tests for StatusResult and TransferRequest."""

    def test_status_success(self):
        assert StatusResult.from_dict({"status": "success"}).is_success
        assert not StatusResult.from_dict({"status": "pending"}).is_success
        assert not StatusResult.from_dict({}).is_success

    def test_transfer_native(self):
        assert TransferRequest(to=RECIPIENT, amount="1").is_native
        assert not TransferRequest(to=RECIPIENT, amount="1", token_address=USDC_SEPOLIA).is_native

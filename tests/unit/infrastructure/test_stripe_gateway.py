import pytest
import stripe

from enrollment.domain.errors import BillingProviderError
from enrollment.infrastructure.adapters import StripeSubscriptionGateway
from shared.config import Settings


class _Subscriptions:
    def __init__(self):
        self.requests = []
        self.error = None

    async def retrieve_async(self, subscription_id):
        self.requests.append(("retrieve", subscription_id, None))
        if self.error:
            raise self.error
        return {"id": subscription_id, "status": "active", "items": {"data": [{"id": "si_1"}, {"id": "si_2"}]}}

    async def update_async(self, subscription_id, params):
        self.requests.append(("update", subscription_id, params))
        if self.error:
            raise self.error
        return {"id": subscription_id}

    async def cancel_async(self, subscription_id):
        self.requests.append(("cancel", subscription_id, None))
        if self.error:
            raise self.error
        return {"id": subscription_id, "status": "canceled"}


class _Client:
    def __init__(self):
        self.subscriptions = _Subscriptions()


@pytest.fixture
def client():
    return _Client()


@pytest.fixture
def stripe_gateway(client):
    return StripeSubscriptionGateway(client=client, product_id="prod_dugsi", currency="usd", interval="month")


async def test_retrieve_maps_item_ids(stripe_gateway):
    subscription = await stripe_gateway.retrieve("sub_1")

    assert subscription.id == "sub_1"
    assert subscription.item_ids == ("si_1", "si_2")


async def test_replace_item_price_sends_inline_price_without_proration(stripe_gateway, client):
    await stripe_gateway.replace_item_price("sub_1", "si_1", 16000)

    [(_, subscription_id, params)] = client.subscriptions.requests
    assert subscription_id == "sub_1"
    assert params["proration_behavior"] == "none"
    assert params["items"] == [
        {
            "id": "si_1",
            "price_data": {
                "product": "prod_dugsi",
                "unit_amount": 16000,
                "currency": "usd",
                "recurring": {"interval": "month"},
            },
        }
    ]


async def test_pause_and_resume_collection(stripe_gateway, client):
    await stripe_gateway.set_collection_paused("sub_1", True)
    await stripe_gateway.set_collection_paused("sub_1", False)

    assert [r[2] for r in client.subscriptions.requests] == [
        {"pause_collection": {"behavior": "void"}},
        {"pause_collection": ""},
    ]


async def test_stripe_errors_are_wrapped(stripe_gateway, client):
    client.subscriptions.error = stripe.InvalidRequestError("No such subscription: 'sub_1'", param="id")

    with pytest.raises(BillingProviderError) as exc_info:
        await stripe_gateway.cancel("sub_1")

    assert exc_info.value.message == "No such subscription: 'sub_1'"
    assert exc_info.value.details == {"action": "cancel", "subscription_id": "sub_1"}


async def test_missing_product_blocks_price_changes(client):
    gateway = StripeSubscriptionGateway(client=client, product_id=None)

    assert gateway.is_price_configured is False
    with pytest.raises(BillingProviderError):
        await gateway.replace_item_price("sub_1", "si_1", 8000)
    assert client.subscriptions.requests == []


async def test_unconfigured_gateway_raises_provider_error():
    gateway = StripeSubscriptionGateway.from_settings(Settings(STRIPE_SECRET_KEY_DUGSI=None))

    with pytest.raises(BillingProviderError, match="not configured"):
        await gateway.cancel("sub_1")

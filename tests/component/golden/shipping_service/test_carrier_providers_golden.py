"""
Shipping Service - Carrier Provider Golden Tests

Runs the live Olva / Shalom adapters against a fake carrier API served
through httpx.MockTransport.
"""
from datetime import date
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from core.config import CarrierConfig
from microservices.shipping_service.factory import create_shipping_service
from microservices.shipping_service.models import (
    Carrier, DestinationZone, PackageDimensions, QuoteRequest,
)
from microservices.shipping_service.protocols import (
    ProviderQuoteError,
    ShipmentCreationError,
    TrackingLookupError,
)
from microservices.shipping_service.providers import OlvaProvider, ShalomProvider
from tests.contracts.shipping.data_contract import ShippingTestDataFactory, ShipmentRequestBuilder

pytestmark = [pytest.mark.component, pytest.mark.golden, pytest.mark.asyncio]

OLVA_URL = "https://olva.test"
SHALOM_URL = "https://shalom.test"


def _quote_request(zone: DestinationZone = DestinationZone.LIMA, weight: float = 3.0) -> QuoteRequest:
    return QuoteRequest(destination=zone, weight_kg=weight, dimensions=PackageDimensions())


@pytest_asyncio.fixture
async def http_client(carrier_api):
    client = carrier_api.client()
    yield client
    await client.aclose()


@pytest.fixture
def olva(http_client):
    return OlvaProvider(api_key="olva-key", http_client=http_client, base_url=OLVA_URL)


@pytest.fixture
def shalom(http_client):
    return ShalomProvider(api_key="shalom-key", http_client=http_client, base_url=SHALOM_URL)


# =============================================================================
# Olva Quotes
# =============================================================================

class TestOlvaQuote:

    async def test_quote_from_live_price(self, olva, carrier_api):
        carrier_api.set_response(
            "POST", f"{OLVA_URL}/v1/quote",
            json_data=ShippingTestDataFactory.make_olva_quote_payload(price=17.5),
        )

        quote = await olva.get_quote(_quote_request())

        assert quote.id == "olva_standard"
        assert quote.carrier == "Olva Courier"
        assert quote.price == Decimal("17.5")
        assert quote.estimated_days == "1-2 días"
        assert quote.available is True

    async def test_request_shape(self, olva, carrier_api):
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/quote", json_data={"price": 25})

        await olva.get_quote(_quote_request(DestinationZone.PROVINCIAS, 8))

        request = carrier_api.assert_request_made("POST", f"{OLVA_URL}/v1/quote")
        assert request["headers"]["authorization"] == "Bearer olva-key"
        assert request["json"]["origin"] == "Lima"
        assert request["json"]["destination"] == "Provincias"
        assert request["json"]["package"]["weight"] == 8
        assert request["json"]["service_type"] == "standard"

    async def test_default_window_when_missing(self, olva, carrier_api):
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/quote", json_data={"price": 25})

        quote = await olva.get_quote(_quote_request(DestinationZone.PROVINCIAS))

        assert quote.estimated_days == "3-7 días"

    @pytest.mark.parametrize("status_code", [400, 401, 500, 503])
    async def test_http_error_is_recoverable(self, olva, carrier_api, status_code):
        carrier_api.set_response(
            "POST", f"{OLVA_URL}/v1/quote", status_code=status_code, json_data={"message": "boom"}
        )

        with pytest.raises(ProviderQuoteError) as exc_info:
            await olva.get_quote(_quote_request())

        assert exc_info.value.recoverable is True
        assert exc_info.value.carrier is Carrier.OLVA
        assert str(status_code) in str(exc_info.value)

    async def test_network_error(self, olva, carrier_api):
        carrier_api.set_error(httpx.ConnectError("connection refused"))

        with pytest.raises(ProviderQuoteError):
            await olva.get_quote(_quote_request())

    @pytest.mark.parametrize("payload", [{}, {"price": "gratis"}, {"price": -3}, {"price": None}])
    async def test_malformed_price(self, olva, carrier_api, payload):
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/quote", json_data=payload)

        with pytest.raises(ProviderQuoteError):
            await olva.get_quote(_quote_request())

    async def test_non_json_body(self, olva, carrier_api):
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/quote", text="<html>maintenance</html>")

        with pytest.raises(ProviderQuoteError):
            await olva.get_quote(_quote_request())

    async def test_json_array_body(self, olva, carrier_api):
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/quote", json_data=[{"price": 10}])

        with pytest.raises(ProviderQuoteError):
            await olva.get_quote(_quote_request())


# =============================================================================
# Shalom Quotes
# =============================================================================

class TestShalomQuote:

    async def test_quote_from_live_price(self, shalom, carrier_api):
        carrier_api.set_response(
            "POST", f"{SHALOM_URL}/v1/cotizar",
            json_data=ShippingTestDataFactory.make_shalom_quote_payload(precio="11.90"),
        )

        quote = await shalom.get_quote(_quote_request())

        assert quote.id == "shalom_economico"
        assert quote.price == Decimal("11.90")
        assert quote.estimated_days == "3-5 días"

    async def test_request_uses_spanish_fields(self, shalom, carrier_api):
        carrier_api.set_response("POST", f"{SHALOM_URL}/v1/cotizar", json_data={"precio": 20})

        await shalom.get_quote(_quote_request(DestinationZone.PROVINCIAS, 4))

        body = carrier_api.get_last_request()["json"]
        assert body["destino"] == "Nacional"
        assert body["peso"] == 4
        assert body["tipo_servicio"] == "economico"

    async def test_missing_precio(self, shalom, carrier_api):
        carrier_api.set_response("POST", f"{SHALOM_URL}/v1/cotizar", json_data={"price": 20})

        with pytest.raises(ProviderQuoteError):
            await shalom.get_quote(_quote_request())

    async def test_over_cap_is_unavailable(self, shalom, carrier_api):
        carrier_api.set_response("POST", f"{SHALOM_URL}/v1/cotizar", json_data={"precio": 200})

        quote = await shalom.get_quote(_quote_request(weight=60))

        assert quote.available is False


# =============================================================================
# Olva Shipments
# =============================================================================

class TestOlvaShipment:

    async def test_create_shipment(self, olva, carrier_api):
        payload = ShippingTestDataFactory.make_olva_shipment_payload(estimated_delivery_date="2024-05-03T18:00:00Z")
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/shipments", json_data=payload)
        request = ShipmentRequestBuilder().with_carrier(Carrier.OLVA).build()

        label = await olva.create_shipment(request)

        assert label.tracking_number == payload["tracking_number"]
        assert label.label_url == payload["label_url"]
        assert label.estimated_delivery_date == date(2024, 5, 3)
        assert label.carrier is Carrier.OLVA

    async def test_shipment_payload(self, olva, carrier_api):
        carrier_api.set_response(
            "POST", f"{OLVA_URL}/v1/shipments", json_data=ShippingTestDataFactory.make_olva_shipment_payload()
        )
        request = ShipmentRequestBuilder().with_carrier(Carrier.OLVA).build()

        await olva.create_shipment(request)

        body = carrier_api.get_last_request()["json"]
        assert body["reference_code"] == request.order_id
        assert body["sender"]["name"] == "AgroBesser"
        assert body["recipient"]["name"] == request.customer_name
        assert body["recipient"]["department"] == "Lima"
        assert body["package"]["declared_value"] == str(request.declared_value)
        assert body["payment_type"] == "sender"

    async def test_missing_date_is_estimated(self, olva, carrier_api):
        carrier_api.set_response(
            "POST", f"{OLVA_URL}/v1/shipments",
            json_data=ShippingTestDataFactory.make_olva_shipment_payload(estimated_delivery_date=None),
        )
        request = ShipmentRequestBuilder().with_carrier(Carrier.OLVA).to_provinces().build()

        label = await olva.create_shipment(request)

        assert (label.estimated_delivery_date - date.today()).days == 7

    async def test_rejection_is_fatal(self, olva, carrier_api):
        carrier_api.set_response(
            "POST", f"{OLVA_URL}/v1/shipments", status_code=422, json_data={"message": "dirección inválida"}
        )
        request = ShipmentRequestBuilder().with_carrier(Carrier.OLVA).build()

        with pytest.raises(ShipmentCreationError) as exc_info:
            await olva.create_shipment(request)

        assert exc_info.value.status_code == 422
        assert exc_info.value.recoverable is False
        assert "dirección inválida" in str(exc_info.value)

    async def test_missing_tracking_number(self, olva, carrier_api):
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/shipments", json_data={"label_url": "x"})

        with pytest.raises(ShipmentCreationError):
            await olva.create_shipment(ShipmentRequestBuilder().with_carrier(Carrier.OLVA).build())


# =============================================================================
# Olva Tracking
# =============================================================================

class TestOlvaTracking:

    async def test_track(self, olva, carrier_api):
        number = ShippingTestDataFactory.make_tracking_number(Carrier.OLVA)
        carrier_api.set_response(
            "GET", f"{OLVA_URL}/v1/tracking/{number}",
            json_data=ShippingTestDataFactory.make_olva_tracking_payload(),
        )

        status = await olva.track_shipment(number)

        assert status.status == "in_transit"
        assert status.message == "En ruta a destino"
        assert [e.status for e in status.events] == ["created", "in_transit"]
        assert status.tracking_url.endswith(number)
        assert status.carrier == "olva"

    async def test_spanish_status_is_normalized(self, olva, carrier_api):
        number = ShippingTestDataFactory.make_tracking_number(Carrier.OLVA)
        carrier_api.set_response(
            "GET", f"{OLVA_URL}/v1/tracking/{number}",
            json_data=ShippingTestDataFactory.make_olva_tracking_payload(
                status="ENTREGADO", status_description="Entregado al destinatario"
            ),
        )

        status = await olva.track_shipment(number)

        assert status.status == "delivered"
        assert status.message == "Entregado al destinatario"

    async def test_unrecognized_status_is_unknown(self, olva, carrier_api):
        carrier_api.set_response(
            "GET", f"{OLVA_URL}/v1/tracking/*",
            json_data=ShippingTestDataFactory.make_olva_tracking_payload(status="EN ADUANAS", status_description=None),
        )

        status = await olva.track_shipment("OLV1")

        assert status.status == "unknown"
        assert status.message == "EN ADUANAS"

    async def test_not_found(self, olva, carrier_api):
        number = ShippingTestDataFactory.make_tracking_number(Carrier.OLVA)

        with pytest.raises(TrackingLookupError) as exc_info:
            await olva.track_shipment(number)

        assert exc_info.value.recoverable is True

    async def test_missing_status(self, olva, carrier_api):
        carrier_api.set_response("GET", f"{OLVA_URL}/v1/tracking/*", json_data={"events": []})

        with pytest.raises(TrackingLookupError):
            await olva.track_shipment("OLV1")


# =============================================================================
# Factory Wiring
# =============================================================================

class TestShippingServiceFactory:

    async def test_no_keys_means_no_live_adapters(self, http_client):
        service = create_shipping_service(CarrierConfig(), http_client=http_client)

        assert service.quote_providers == []
        assert service.shipment_providers == {}

    async def test_keys_build_adapters(self, http_client):
        config = CarrierConfig(olva_api_key="k1", shalom_api_key="k2")

        service = create_shipping_service(config, http_client=http_client)

        assert [p.carrier for p in service.quote_providers] == [Carrier.OLVA, Carrier.SHALOM]
        assert set(service.shipment_providers) == {Carrier.OLVA}

    async def test_live_failure_end_to_end_falls_back(self, carrier_api, http_client):
        """Both carrier APIs down -> static table"""
        config = CarrierConfig(
            olva_api_key="k1", olva_api_url=OLVA_URL,
            shalom_api_key="k2", shalom_api_url=SHALOM_URL,
        )
        carrier_api.set_response("POST", f"{OLVA_URL}/v1/quote", status_code=503, json_data={})
        carrier_api.set_response("POST", f"{SHALOM_URL}/v1/cotizar", status_code=500, json_data={})
        service = create_shipping_service(config, http_client=http_client)

        quotes = await service.get_quotes("provincias", 8)

        assert [q.price for q in quotes] == [Decimal("26"), Decimal("28"), Decimal("31"), Decimal("36")]
        assert len(carrier_api.get_requests("POST")) == 2

"""Tests for the NHTSA vPIC decoder adapter."""

import httpx
import pytest

from vehicle_lookup.adapters.vin_decoder import NHTSAVinDecoder, create_vin_decoder
from vehicle_lookup.adapters.vin_decoder.nhtsa import NHTSA_VARIABLE_FIELDS, map_decode_results
from vehicle_lookup.core.errors import UpstreamAppError, ValidationAppError

VIN = "1HGCM82633A123456"
BASE_URL = "https://vpic.test/api/vehicles/DecodeVin"


def _results(**values_by_id: str | None) -> list[dict]:
    return [{"VariableId": int(k[1:]), "Value": v} for k, v in values_by_id.items()]


def _decoder(handler) -> NHTSAVinDecoder:
    return NHTSAVinDecoder(base_url=BASE_URL, transport=httpx.MockTransport(handler))


class TestMapDecodeResults:
    def test_maps_every_known_variable(self) -> None:
        results = [{"VariableId": vid, "Value": f"value-{vid}"} for vid in NHTSA_VARIABLE_FIELDS]

        fields = map_decode_results(results)

        assert fields["make"] == "value-26"
        assert fields["model"] == "value-28"
        assert fields["year"] == "value-29"
        assert fields["body_class"] == "value-5"
        assert fields["engine_configuration"] == "value-64"
        assert fields["plant_country"] == "value-75"
        assert all(v is not None for v in fields.values())

    def test_missing_and_empty_values_become_none(self) -> None:
        fields = map_decode_results(_results(v26="HONDA", v28="", v29=None))

        assert fields["make"] == "HONDA"
        assert fields["model"] is None
        assert fields["year"] is None
        assert fields["transmission"] is None
        assert set(fields) == set(NHTSA_VARIABLE_FIELDS.values())

    def test_first_entry_wins_and_unknown_ids_ignored(self) -> None:
        results = [
            {"VariableId": 26, "Value": "HONDA"},
            {"VariableId": 26, "Value": "ACURA"},
            {"VariableId": 999, "Value": "ignored"},
            "not-a-mapping",
        ]

        fields = map_decode_results(results)

        assert fields["make"] == "HONDA"
        assert "ignored" not in fields.values()


class TestNHTSAVinDecoder:
    @pytest.mark.asyncio
    async def test_decode_calls_vpic_with_json_format(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"Results": _results(v26="HONDA", v28="Accord", v29="2003")})

        decoded = await _decoder(handler).decode(VIN)

        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert seen[0].url.path == f"/api/vehicles/DecodeVin/{VIN}"
        assert seen[0].url.params["format"] == "json"
        assert decoded.vin == VIN
        assert decoded.make == "HONDA"
        assert decoded.model == "Accord"
        assert decoded.year == "2003"
        assert decoded.fuel_type is None

    @pytest.mark.asyncio
    async def test_missing_results_key_yields_empty_record(self) -> None:
        decoded = await _decoder(lambda request: httpx.Response(200, json={})).decode(VIN)

        assert decoded.vin == VIN
        assert decoded.make is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    async def test_non_success_status_raises_upstream_error(self, status: int) -> None:
        decoder = _decoder(lambda request: httpx.Response(status, json={"Message": "error"}))

        with pytest.raises(UpstreamAppError) as exc_info:
            await decoder.decode(VIN)

        assert exc_info.value.message == "Failed to decode VIN from NHTSA"
        assert exc_info.value.details["upstream_status"] == status

    @pytest.mark.asyncio
    async def test_transport_error_raises_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamAppError) as exc_info:
            await _decoder(handler).decode(VIN)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamAppError):
            await _decoder(handler).decode(VIN)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_upstream_error(self) -> None:
        decoder = _decoder(lambda request: httpx.Response(200, content=b"<html>maintenance</html>"))

        with pytest.raises(UpstreamAppError):
            await decoder.decode(VIN)

    @pytest.mark.asyncio
    async def test_non_object_json_raises_upstream_error(self) -> None:
        decoder = _decoder(lambda request: httpx.Response(200, json=["unexpected"]))

        with pytest.raises(UpstreamAppError):
            await decoder.decode(VIN)


class TestFactory:
    def test_creates_nhtsa_decoder_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from vehicle_lookup.adapters.vin_decoder import factory

        monkeypatch.setattr(factory.settings.vin_decoder, "provider", "NHTSA")
        monkeypatch.setattr(factory.settings.vin_decoder, "timeout_seconds", 3.5)

        decoder = create_vin_decoder()

        assert isinstance(decoder, NHTSAVinDecoder)
        assert decoder.timeout_seconds == 3.5
        assert decoder.base_url == BASE_URL

    def test_unknown_provider_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from vehicle_lookup.adapters.vin_decoder import factory

        monkeypatch.setattr(factory.settings.vin_decoder, "provider", "carfax")

        with pytest.raises(ValidationAppError) as exc_info:
            create_vin_decoder()

        assert exc_info.value.code == "vin_decoder_unknown_provider"

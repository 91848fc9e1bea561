import asyncio
import base64
import pathlib
import sys

import httpx
import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from carrier_hub import Dispatcher, Settings, build_default_registry, build_dispatcher, verify  # noqa: E402
from carrier_hub.integrations import braspress, correios  # noqa: E402
from carrier_hub.integrations.tracking import MockTracker, track_codes  # noqa: E402


SETTINGS = Settings(
    mode="live",
    http_timeout=1.0,
    correios_base_url="https://correios.test",
    braspress_base_url="https://braspress.test",
)


def run_tracking(plugin, data, fields):
    handle = verify(plugin, "tracking")
    return asyncio.run(handle.action(data, fields))


def test_correios_tracking_keeps_input_order_with_uneven_latency():
    seen_auth = []

    async def handler(request: httpx.Request) -> httpx.Response:
        code = request.url.path.rsplit("/", 1)[-1]
        seen_auth.append(request.headers["Authorization"])
        # El primer código responde último.
        await asyncio.sleep({"AA1": 0.05, "BB2": 0.0, "CC3": 0.02}[code])
        return httpx.Response(200, json={"objetos": [{"codObjeto": code}]})

    plugin = correios.build_plugin(SETTINGS, transport=httpx.MockTransport(handler))
    results = run_tracking(plugin, {"codes": ["AA1", "BB2", "CC3"]}, {"token": "T"})

    assert [result.code for result in results] == ["AA1", "BB2", "CC3"]
    assert [result.payload["objetos"][0]["codObjeto"] for result in results] == ["AA1", "BB2", "CC3"]
    assert set(seen_auth) == {"Bearer T"}


def test_correios_tracking_reports_failures_per_code():
    def handler(request: httpx.Request) -> httpx.Response:
        code = request.url.path.rsplit("/", 1)[-1]
        if code == "BAD":
            return httpx.Response(404, json={"msg": "Objeto não encontrado"})
        assert request.url.params["resultado"] == "T"
        return httpx.Response(200, json={"code": code})

    plugin = correios.build_plugin(SETTINGS, transport=httpx.MockTransport(handler))
    results = run_tracking(plugin, {"codes": ["OK1", "BAD", "OK2"]}, {"token": "T"})

    assert [result.ok for result in results] == [True, False, True]
    assert results[1].code == "BAD"
    assert "404" in results[1].error
    assert results[1].payload is None
    assert results[2].payload == {"code": "OK2"}


def test_braspress_tracking_uses_basic_auth_and_cnpj():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"conhecimentos": []})

    plugin = braspress.build_plugin(SETTINGS, transport=httpx.MockTransport(handler))
    fields = {"user": "api", "password": "secret", "cnpj": "12345678000199"}
    results = run_tracking(plugin, {"codes": ["5501"]}, fields)

    assert results[0].ok
    request = requests[0]
    assert request.url.path == "/v3/tracking/byNf/12345678000199/5501/json"
    expected = base64.b64encode(b"api:secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"


def test_tracking_codes_are_escaped_in_urls():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.raw_path)
        return httpx.Response(200, json={})

    plugin = correios.build_plugin(SETTINGS, transport=httpx.MockTransport(handler))
    run_tracking(plugin, {"codes": ["../admin"]}, {"token": "T"})

    assert paths[0].startswith(b"/srorastro/v1/objetos/..%2Fadmin")


def test_per_code_timeout_does_not_abort_siblings():
    async def lookup(code):
        if code == "slow":
            await asyncio.sleep(5)
        return {"code": code}

    results = asyncio.run(track_codes("Correios", ["fast", "slow", "also-fast"], lookup, timeout=0.05))

    assert [result.code for result in results] == ["fast", "slow", "also-fast"]
    assert [result.ok for result in results] == [True, False, True]
    assert results[1].error == "TimeoutError"


def test_empty_code_list_yields_empty_result():
    plugin = correios.build_plugin(Settings(mode="mock"))
    assert run_tracking(plugin, {"codes": []}, {"token": "T"}) == []


def test_blank_codes_are_rejected():
    plugin = correios.build_plugin(Settings(mode="mock"))
    with pytest.raises(ValueError):
        run_tracking(plugin, {"codes": ["ok", "  "]}, {"token": "T"})


def test_mock_tracker_returns_synthetic_events():
    tracker = MockTracker("Correios")
    results = asyncio.run(track_codes("Correios", ["1", "2"], tracker, timeout=None))

    assert [result.payload["code"] for result in results] == ["1", "2"]
    assert results[0].to_dict()["payload"]["mock"] is True


def test_mock_tracker_keeps_no_state_between_requests():
    tracker = MockTracker("Correios")
    before = dict(vars(tracker))

    async def run_many():
        for _ in range(100):
            await track_codes("Correios", ["1", "2"], tracker, timeout=None)

    asyncio.run(run_many())

    assert vars(tracker) == before
    with pytest.raises(AttributeError):
        tracker.status = "changed"  # type: ignore[misc]


def test_repeated_mock_dispatches_return_fresh_results():
    dispatcher = build_dispatcher(Settings(mode="mock"))

    async def run_many():
        return [
            await dispatcher.dispatch("correios", "tracking", {"codes": ["1", "2"]}, {"token": "T"})
            for _ in range(100)
        ]

    rounds = asyncio.run(run_many())

    assert all([result.code for result in results] == ["1", "2"] for results in rounds)
    assert rounds[0][0] is not rounds[-1][0]


def test_default_registry_routes_to_live_http():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"host": request.url.host})

    registry = build_default_registry(SETTINGS, transport=httpx.MockTransport(handler))
    dispatcher = Dispatcher(registry)

    results = asyncio.run(dispatcher.dispatch("Correios", "tracking", {"codes": ["1", "2"]}, {"token": "T"}))

    assert [result.payload["host"] for result in results] == ["correios.test", "correios.test"]

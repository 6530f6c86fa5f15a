import pytest

pytest.importorskip("prometheus_client")

from prometheus_client import REGISTRY

from bfxconn.metrics import exporter


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_metrics_counters_and_gauge():
    before = _sample("orders_total", {"venue": "test", "side": "buy", "result": "ok"})
    exporter.ORDERS_TOTAL.labels("test", "buy", "ok").inc()
    exporter.QUOTE_PRICE.labels("test", "bid").set(5.0)
    after = _sample("orders_total", {"venue": "test", "side": "buy", "result": "ok"})
    assert after - before == 1.0
    assert _sample("quote_price", {"venue": "test", "side": "bid"}) == 5.0


def test_start_metrics_server_coerces_port(monkeypatch):
    ports: list[int] = []
    monkeypatch.setattr(exporter, "start_http_server", ports.append)
    exporter.start_metrics_server("9110")
    assert ports == [9110]

"""
Tests for the stdout and InfluxDB sinks.
"""

import io
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

import requests

from fios_stats.errors import SinkError
from fios_stats.models import MetricKind, MetricSet, MetricValue
from fios_stats.sink import Ack, InfluxSink, StdoutSink, to_line_protocol, to_nanoseconds

TS = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
TS_NS = 1_700_000_000_000_000_000

METRICS = MetricSet([
    MetricValue("net_rx", 8000, MetricKind.INTEGER, "bit"),
    MetricValue("snr_db", 35.5, MetricKind.FLOAT, "dB"),
    MetricValue("net_status", "up", MetricKind.STATUS),
    MetricValue("net_name", 'Coax "WAN"', MetricKind.TEXT),
])


class TestStdoutSink(unittest.TestCase):
    def test_one_line_per_metric_in_order(self):
        out = io.StringIO()
        ack = StdoutSink(out).emit(METRICS, TS)
        self.assertEqual(
            out.getvalue().splitlines(),
            ["net_rx=8000", "snr_db=35.5", "net_status=up", 'net_name=Coax "WAN"'],
        )
        self.assertEqual(ack, Ack(records=4))


class TestLineProtocol(unittest.TestCase):
    def test_nanoseconds(self):
        self.assertEqual(to_nanoseconds(TS), TS_NS)

    def test_naive_timestamp_is_utc(self):
        self.assertEqual(to_nanoseconds(TS.replace(tzinfo=None)), TS_NS)

    def test_single_record(self):
        line = to_line_protocol(METRICS, TS, "router", {"host": "myfiosgateway.com"})
        self.assertEqual(
            line,
            'router,host=myfiosgateway.com '
            'net_rx=8000i,snr_db=35.5,net_status="up",net_name="Coax \\"WAN\\"" '
            f"{TS_NS}",
        )
        self.assertNotIn("\n", line)

    def test_tag_escaping(self):
        metrics = MetricSet([MetricValue("x", 1, MetricKind.INTEGER)])
        line = to_line_protocol(metrics, TS, "my router", {"host": "a,b=c"})
        self.assertTrue(line.startswith("my\\ router,host=a\\,b\\=c x=1i "))

    def test_measurement_keeps_equals_sign(self):
        metrics = MetricSet([MetricValue("x", 1, MetricKind.INTEGER)])
        line = to_line_protocol(metrics, TS, "a=b,c d")
        self.assertTrue(line.startswith("a=b\\,c\\ d x=1i "))

    def test_empty_set_rejected(self):
        with self.assertRaises(SinkError):
            to_line_protocol(MetricSet(), TS)


class TestInfluxSink(unittest.TestCase):
    URI = "http://influx:8086/write?db=router"

    def _sink(self, status_code=204, side_effect=None):
        http = MagicMock(spec=requests.Session)
        resp = MagicMock(spec=requests.Response)
        resp.status_code = status_code
        http.post.return_value = resp
        http.post.side_effect = side_effect
        return InfluxSink(self.URI, http, host_tag="myfiosgateway.com"), http

    def test_posts_one_record(self):
        sink, http = self._sink()
        ack = sink.emit(METRICS, TS)

        args, kwargs = http.post.call_args
        self.assertEqual(args[0], self.URI)
        body = kwargs["data"].decode("utf-8")
        self.assertEqual(body.count("\n"), 1)
        self.assertTrue(body.startswith("router,host=myfiosgateway.com net_rx=8000i,"))
        self.assertEqual(ack, Ack(records=1, status_code=204))

    def test_unexpected_status_is_sink_error(self):
        sink, _ = self._sink(status_code=400)
        with self.assertRaises(SinkError):
            sink.emit(METRICS, TS)

    def test_transport_error_is_sink_error(self):
        sink, _ = self._sink(side_effect=requests.ConnectionError("refused"))
        with self.assertRaises(SinkError):
            sink.emit(METRICS, TS)

    def test_no_retry(self):
        sink, http = self._sink(status_code=500)
        with self.assertRaises(SinkError):
            sink.emit(METRICS, TS)
        self.assertEqual(http.post.call_count, 1)


if __name__ == "__main__":
    unittest.main()

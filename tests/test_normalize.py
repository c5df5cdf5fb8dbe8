"""
Tests for metric normalization onto the canonical schema.
"""

import json
import unittest

from fios_stats.extract import FieldSpec, extract
from fios_stats.models import MetricKind, MetricSet, MetricValue, RawPage
from fios_stats.normalize import SCHEMA, SCHEMA_VERSION, SchemaEntry, normalize, parse_rate

INTEGER = MetricKind.INTEGER
FLOAT = MetricKind.FLOAT
TEXT = MetricKind.TEXT
STATUS = MetricKind.STATUS


def _set(*items):
    return MetricSet(MetricValue(*item) for item in items)


class TestParseRate(unittest.TestCase):
    def test_kbps(self):
        self.assertEqual(parse_rate("12.5 Kbps"), 12500)

    def test_mbps(self):
        self.assertEqual(parse_rate("940 Mbps"), 940_000_000)

    def test_gbps_no_space(self):
        self.assertEqual(parse_rate("1Gbps"), 1_000_000_000)

    def test_plain_bps(self):
        self.assertEqual(parse_rate("300 bps"), 300)

    def test_not_a_rate(self):
        self.assertIsNone(parse_rate("fast"))

    def test_overflowing_rate(self):
        self.assertIsNone(parse_rate("1" + "0" * 400 + " Kbps"))


class TestNormalize(unittest.TestCase):
    def test_default_schema_network_page(self):
        raw = _set(
            ("status", "Connected", STATUS),
            ("rx_bytes", 1000, INTEGER, "B"),
            ("tx_bytes", 500, INTEGER, "B"),
            ("rx_errors", 3, INTEGER),
        )
        out = normalize(raw)
        self.assertEqual(
            list(out.items()),
            [
                ("net_rx", MetricValue("net_rx", 8000, INTEGER, "bit")),
                ("net_tx", MetricValue("net_tx", 4000, INTEGER, "bit")),
                ("net_rx_errors", MetricValue("net_rx_errors", 3, INTEGER)),
                ("net_status", MetricValue("net_status", "connected", STATUS)),
            ],
        )

    def test_unmapped_fields_dropped(self):
        out = normalize(_set(("mystery", 1, INTEGER), ("rx_errors", 0, INTEGER)))
        self.assertEqual(list(out), ["net_rx_errors"])

    def test_rate_text_to_bits_per_second(self):
        schema = [SchemaEntry("link", "link_rate", INTEGER, "bps")]
        out = normalize(_set(("link", "12.5 Kbps", TEXT)), schema)
        self.assertEqual(out["link_rate"].value, 12500)
        self.assertEqual(out["link_rate"].unit, "bps")

    def test_numeric_text_to_float(self):
        schema = [SchemaEntry("snr", "snr_db", FLOAT, "dB")]
        out = normalize(_set(("snr", "35.2 dB", TEXT)), schema)
        self.assertEqual(out["snr_db"].value, 35.2)

    def test_unconvertible_value_dropped(self):
        schema = [SchemaEntry("snr", "snr_db", FLOAT, "dB")]
        self.assertEqual(len(normalize(_set(("snr", "n/a", TEXT)), schema)), 0)

    def test_infinite_text_into_integer_field_dropped(self):
        schema = [SchemaEntry("sig", "sig", INTEGER)]
        self.assertEqual(normalize(_set(("sig", "1e999", TEXT)), schema), MetricSet())

    def test_overflowing_rate_dropped(self):
        schema = [SchemaEntry("link", "link_rate", INTEGER, "bps")]
        huge = "1" + "0" * 400 + " Kbps"
        self.assertEqual(normalize(_set(("link", huge, TEXT)), schema), MetricSet())

    def test_non_finite_floats_dropped(self):
        for kind in (INTEGER, FLOAT):
            schema = [SchemaEntry("snr", "snr_db", kind, "dB")]
            for bad in (float("nan"), float("inf"), float("-inf")):
                with self.subTest(kind=kind, value=bad):
                    self.assertEqual(normalize(_set(("snr", bad, FLOAT)), schema), MetricSet())

    def test_float_into_integer_field_rounds(self):
        schema = [SchemaEntry("temp", "temp_c", INTEGER, "C")]
        out = normalize(_set(("temp", 41.7, FLOAT)), schema)
        self.assertEqual(out["temp_c"].value, 42)
        self.assertIsInstance(out["temp_c"].value, int)

    def test_unit_kept_from_extractor_when_schema_has_none(self):
        schema = [SchemaEntry("signal", "signal", INTEGER)]
        out = normalize(_set(("signal", -52, INTEGER, "dBm")), schema)
        self.assertEqual(out["signal"].unit, "dBm")

    def test_empty_input(self):
        self.assertEqual(normalize(MetricSet()), MetricSet())

    def test_input_not_modified(self):
        raw = _set(("rx_bytes", 10, INTEGER, "B"))
        normalize(raw)
        self.assertEqual(raw["rx_bytes"].value, 10)

    def test_schema_names_unique(self):
        names = [entry.name for entry in SCHEMA]
        self.assertEqual(len(names), len(set(names)))
        self.assertEqual(SCHEMA_VERSION, 1)


class TestExtractNormalizeEndToEnd(unittest.TestCase):
    MARKUP = (
        "<table>"
        "<tr><td>Uptime</td><td>3 days</td></tr>"
        "<tr><td>Signal</td><td>-52 dBm</td></tr>"
        "</table>"
    )
    FIELDS = (
        FieldSpec("Uptime", "uptime", TEXT),
        FieldSpec("Signal", "signal", INTEGER, "dBm"),
    )
    SCHEMA = (
        SchemaEntry("uptime", "uptime", TEXT),
        SchemaEntry("signal", "signal_dbm", INTEGER, "dBm"),
    )

    def _run(self, page):
        return normalize(extract(page, self.FIELDS), self.SCHEMA)

    def test_uptime_and_signal(self):
        page = RawPage("status", "https://myfiosgateway.com/status", "text/html", self.MARKUP)
        out = self._run(page)
        self.assertEqual(list(out.items()), [
            ("uptime", MetricValue("uptime", "3 days", TEXT)),
            ("signal_dbm", MetricValue("signal_dbm", -52, INTEGER, "dBm")),
        ])

    def test_idempotent(self):
        page = RawPage("status", "https://myfiosgateway.com/status", "text/html", self.MARKUP)
        self.assertEqual(self._run(page), self._run(page))

    def test_idempotent_default_network_page(self):
        doc = {"bandwidth": {"minutesRx": [7], "minutesTx": [9]}, "status": "Up"}
        page = RawPage("network", "https://myfiosgateway.com/api/network/1",
                       "application/json", json.dumps(doc))
        first = normalize(extract(page))
        self.assertEqual(first, normalize(extract(page)))
        self.assertEqual(first.values_dict(), {"net_rx": 56, "net_tx": 72, "net_status": "up"})


if __name__ == "__main__":
    unittest.main()

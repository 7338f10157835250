"""Tests for DeparturesClient."""

import threading
import time
import unittest
from unittest.mock import patch

from support import API_KEY, FEED_1_URL, FEED_26_URL, FEED_51_URL, build_payload, load_index

from mtadepartures.client import DeparturesClient, create_client
from mtadepartures.config import ClientConfig
from mtadepartures.exceptions import FeedDecodeError, FeedFetchError, UnknownComplexError
from mtadepartures.feed_cache import FeedCache
from mtadepartures.models import ComplexResponse
from mtadepartures.station_index import StationLoader


class TestDeparturesClient(unittest.TestCase):
    """Test the departures flow against canned feeds."""

    def setUp(self):
        now = int(time.time())
        self.payloads = {
            FEED_1_URL: build_payload(
                [
                    {
                        "route_id": "1",
                        "train_id": "01 1234+ 242/SFT",
                        "stops": [("101N", now + 600), ("101S", now + 120)],
                    },
                    {"route_id": "2", "stops": [("101N", now + 300), ("101N", now - 600)]},
                    {"route_id": "4", "stops": [("301S", now + 240), ("301S", now + 60)]},
                ]
            ),
            FEED_51_URL: build_payload([{"route_id": "7", "stops": [("102S", now + 90)]}]),
            FEED_26_URL: build_payload([{"route_id": "A", "stops": [("201N", now + 30)]}]),
        }
        self.fetched = []
        self._lock = threading.Lock()
        self.now = now
        self.client = DeparturesClient(
            API_KEY, station_index=load_index(), feed_cache=FeedCache(self.fetch)
        )

    def fetch(self, url):
        with self._lock:
            self.fetched.append(url)
        return self.payloads[url]

    def test_single_complex_returns_response(self):
        response = self.client.departures(100)

        self.assertIsInstance(response, ComplexResponse)
        self.assertEqual(response.complex_id, 100)
        self.assertEqual(response.name, "Times Sq-42 St")
        self.assertEqual(
            [line.line_name for line in response.lines], ["Broadway - 7Av", "Flushing"]
        )

    def test_departures_sorted(self):
        response = self.client.departures(100)

        broadway = response.lines[0]
        self.assertEqual(
            [(d.route_id, d.time) for d in broadway.departures["N"]],
            [("2", self.now + 300), ("1", self.now + 600)],
        )
        self.assertEqual(broadway.departures["N"][1].destination_complex_id, "635")
        self.assertEqual([d.time for d in broadway.departures["S"]], [self.now + 120])

    def test_no_past_departures(self):
        response = self.client.departures(100)
        for line in response.lines:
            for departures in line.departures.values():
                for departure in departures:
                    self.assertGreaterEqual(departure.time, self.now)

    def test_many_complexes_in_request_order(self):
        responses = self.client.departures([300, 100, 200])

        self.assertIsInstance(responses, list)
        self.assertEqual([r.complex_id for r in responses], [300, 100, 200])
        lexington = responses[0].lines[0]
        self.assertEqual(
            [d.time for d in lexington.departures["S"]], [self.now + 60, self.now + 240]
        )

    def test_shared_feed_fetched_once(self):
        """Lines 1-6 share a feed, so complexes 100 and 300 need one fetch of it."""
        self.client.departures([100, 300])

        self.assertEqual(sorted(self.fetched), sorted([FEED_1_URL, FEED_51_URL]))

    def test_second_request_uses_cache(self):
        first = self.client.departures(100)
        second = self.client.departures(100)

        self.assertEqual(len(self.fetched), 2)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_extraction_uses_every_fetched_feed(self):
        """Each complex is extracted from the whole fetched feed set."""
        responses = self.client.departures([200, 100])
        self.assertEqual(responses[0].lines[0].line_name, "8th Av - Fulton St")
        self.assertEqual(len(responses[1].lines), 2)

    def test_fetch_failure_fails_request(self):
        def fetch(url):
            if url == FEED_51_URL:
                raise FeedFetchError(url, "503 Server Error")
            return self.payloads[url]

        client = DeparturesClient(API_KEY, station_index=load_index(), feed_cache=FeedCache(fetch))
        with self.assertRaises(FeedFetchError):
            client.departures(100)

    def test_decode_failure_fails_request(self):
        self.payloads[FEED_1_URL] = b"\xff\xff\xff\xff"
        with self.assertRaises(FeedDecodeError):
            self.client.departures(100)

    def test_unknown_complex_before_fetch(self):
        with self.assertRaises(UnknownComplexError):
            self.client.departures([100, 999])
        self.assertEqual(self.fetched, [])

    def test_empty_request(self):
        with self.assertRaises(ValueError):
            self.client.departures([])

    def test_to_dict(self):
        response = self.client.departures(200).to_dict()

        self.assertEqual(
            response,
            {
                "complexId": 200,
                "name": "42 St-Port Authority Bus Terminal",
                "lines": [
                    {
                        "name": "8th Av - Fulton St",
                        "departures": {
                            "N": [
                                {
                                    "routeId": "A",
                                    "time": self.now + 30,
                                    "destinationStationId": None,
                                }
                            ],
                            "S": [],
                        },
                    }
                ],
            },
        )

    def test_custom_feed_template(self):
        config = ClientConfig(feed_url_template="https://feeds.test/{feed_id}?key={api_key}")
        payload = self.payloads[FEED_26_URL]
        urls = []

        def fetch(url):
            urls.append(url)
            return payload

        client = DeparturesClient(
            API_KEY, station_index=load_index(), config=config, feed_cache=FeedCache(fetch)
        )
        client.departures(200)

        self.assertEqual(urls, ["https://feeds.test/26?key=KEY"])


class TestClientSetup(unittest.TestCase):
    """Test client construction and configuration."""

    @patch.object(StationLoader, "load_from_url")
    def test_loads_station_data_when_not_given(self, mock_load):
        mock_load.return_value = load_index()

        with create_client(API_KEY) as client:
            self.assertIs(client.station_index, mock_load.return_value)
            self.assertIsNotNone(client.mta_client)
        mock_load.assert_called_once()

    def test_config_validation(self):
        with self.assertRaises(ValueError):
            ClientConfig(feed_url_template="http://feeds.test/")
        with self.assertRaises(ValueError):
            ClientConfig(max_workers=0)

    @patch.dict(
        "os.environ",
        {"MTA_FEED_URL_TEMPLATE": "https://f.test/{feed_id}/{api_key}", "MTA_REQUEST_TIMEOUT": "3"},
    )
    def test_config_from_env(self):
        config = ClientConfig.from_env()
        self.assertEqual(config.feed_url_template, "https://f.test/{feed_id}/{api_key}")
        self.assertEqual(config.request_timeout, 3.0)
        self.assertEqual(config.max_workers, 8)


if __name__ == "__main__":
    unittest.main()

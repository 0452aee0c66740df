"""Tests for the headless `python -m mapsync` runner."""

import logging

import mapsync.__main__ as runner
from mapsync.client import ClientState, MapSyncClient
from conftest import FakeResponse, FakeSession, make_flight

GATEWAY_URL = 'http://gateway.test/api/flights'


def test_runs_polls_and_stops(monkeypatch, caplog):
    session = FakeSession(FakeResponse(200, {
        'time': 1700000000,
        'flights': [make_flight('aaaaaa')],
        'source': 'demo',
        'count': 1,
    }))
    created = []

    def build_client(client_config):
        client = MapSyncClient(client_config, session=session)
        created.append(client)
        return client

    monkeypatch.setattr(runner, 'MapSyncClient', build_client)
    caplog.set_level(logging.INFO, logger='mapsync')

    runner.main(['--url', GATEWAY_URL, '--interval', '60', '--run-for', '0.05'])

    client = created[0]
    assert client.config.polling.gateway_url == GATEWAY_URL
    assert client.config.polling.interval == 60.0
    assert client.state is ClientState.STOPPED
    assert session.calls[0]['url'] == GATEWAY_URL
    assert set(client.registry) == {'aaaaaa'}
    assert 'Final stats' in caplog.text


def test_parse_args_defaults():
    args = runner.parse_args([])

    assert args.url == runner.config.polling.gateway_url
    assert args.run_for is None
    assert args.verbose is False

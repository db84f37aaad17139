"""Tests for run_gateway management command."""

from io import StringIO

import pytest
from django.core.management import call_command


class _FakeServer:
    """Stands in for the cheroot server, stops as soon as it starts."""

    instances: list['_FakeServer'] = []

    def __init__(self, bind_addr, wsgi_app, numthreads):
        self.bind_addr = bind_addr
        self.wsgi_app = wsgi_app
        self.numthreads = numthreads
        self.stopped = False
        self.instances.append(self)

    def start(self):
        raise KeyboardInterrupt

    def stop(self):
        self.stopped = True


@pytest.fixture
def fake_server(monkeypatch):
    """Replace the WSGI server used by the command.

    Returns:
        List of created fake servers.
    """
    _FakeServer.instances = []
    monkeypatch.setattr(
        'gateway.apps.files.management.commands.run_gateway.WSGIServer',
        _FakeServer,
    )
    return _FakeServer.instances


@pytest.mark.django_db
class TestRunGatewayCommand:
    """Tests for run_gateway management command."""

    def test_binds_configured_address(self, fake_server, settings):
        """Server binds host and port from settings."""
        settings.GATEWAY_HOST = '127.0.0.1'
        settings.GATEWAY_PORT = 9999
        out = StringIO()

        call_command('run_gateway', stdout=out)

        (server,) = fake_server
        assert server.bind_addr == ('127.0.0.1', 9999)
        assert server.stopped
        assert 'Gateway stopped' in out.getvalue()

    def test_options_override_settings(self, fake_server):
        """Command line options win over settings."""
        call_command(
            'run_gateway',
            '--host', 'localhost',
            '--port', '7000',
            '--threads', '4',
            stdout=StringIO(),
        )

        (server,) = fake_server
        assert server.bind_addr == ('localhost', 7000)
        assert server.numthreads == 4

    def test_init_index_backfills(
        self,
        fake_server,
        settings,
        make_file,
        write_key,
        search_index,
    ):
        """INIT_INDEX indexes public files before serving."""
        settings.INIT_INDEX = True
        make_file(write_key, file_name='startup.txt')
        make_file(write_key, file_name='hidden.txt', is_private=True)
        out = StringIO()

        call_command('run_gateway', stdout=out)

        assert 'initialised with 1 files' in out.getvalue()
        assert search_index.search('startup', 1, 10).total == 1
        assert search_index.search('hidden', 1, 10).total == 0

"""Django management command to run the gateway HTTP server."""

import logging
from typing import Any, final, override

from cheroot.wsgi import Server as WSGIServer
from django.conf import settings
from django.core.management.base import BaseCommand
from django.core.wsgi import get_wsgi_application

from gateway.apps.search.index import get_search_index
from gateway.apps.search.logic.sync import backfill_public_files

logger = logging.getLogger(__name__)

_SERVER_NAME = 'ContentGateway'


@final
class Command(BaseCommand):
    """Run the gateway using cheroot WSGI server."""

    help = 'Run the content gateway HTTP server'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--host',
            type=str,
            default=None,
            help='Host to bind to (default: from settings)',
        )
        parser.add_argument(
            '--port',
            type=int,
            default=None,
            help='Port to bind to (default: from settings)',
        )
        parser.add_argument(
            '--threads',
            type=int,
            default=10,
            help='Worker threads (default: 10)',
        )
        parser.add_argument(
            '--init-index',
            action='store_true',
            default=False,
            help='Backfill the search index before serving',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments.
            options: Keyword arguments from command line.
        """
        if options['init_index'] or settings.INIT_INDEX:
            indexed = backfill_public_files(get_search_index())
            self.stdout.write(f'Search index initialised with {indexed} files')

        host = options['host'] or settings.GATEWAY_HOST
        port = options['port'] or settings.GATEWAY_PORT

        server = WSGIServer(
            bind_addr=(host, port),
            wsgi_app=get_wsgi_application(),
            numthreads=options['threads'],
        )
        server.server_name = _SERVER_NAME

        self.stdout.write(
            self.style.SUCCESS(f'Starting gateway on {host}:{port}'),
        )
        try:
            logger.info('Gateway starting on %s:%d', host, port)
            server.start()
        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING('\nShutting down...'))
        finally:
            server.stop()
            self.stdout.write(self.style.SUCCESS('Gateway stopped'))

"""Management command to rebuild the search index from file records."""

import logging
from typing import Any, final, override

from django.core.management.base import BaseCommand

from gateway.apps.search.index import get_search_index
from gateway.apps.search.logic.sync import backfill_public_files

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """Index every public file record."""

    help = 'Backfill the search index with all public files'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Drop every indexed document before backfilling',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        index = get_search_index()
        if options['clear']:
            index.clear()
            self.stdout.write('Cleared search index')

        indexed = backfill_public_files(index)
        logger.info('Rebuilt search index with %d public files', indexed)
        self.stdout.write(
            self.style.SUCCESS(f'Indexed {indexed} public files'),
        )

"""Management command to issue a new API key."""

import logging
import secrets
from typing import Any, Final, final, override

from django.core.management.base import BaseCommand

from gateway.apps.keys.models import ApiKey, Permission

# Token length in bytes (generates 64 hex chars)
_TOKEN_BYTES: Final = 32

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """Create an API key and print its token."""

    help = 'Issue a new API key'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--permission',
            choices=Permission.values,
            default=Permission.READ,
            help='Permission level (default: read)',
        )
        parser.add_argument(
            '--label',
            default='',
            help='Who or what the key is issued to',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        api_key = ApiKey.objects.create(
            token=secrets.token_hex(_TOKEN_BYTES),
            permission=options['permission'],
            label=options['label'],
        )
        logger.info(
            'Issued API key #%d with %s permission',
            api_key.pk,
            api_key.permission,
        )
        self.stdout.write(api_key.token)

"""
Django management command to check and mark expired licenses.

Runs the same sweep as the hourly Celery beat task.
"""

from django.core.management.base import BaseCommand

from core.tasks import expire_licenses


class Command(BaseCommand):
    """Command to check and mark expired licenses."""

    help = "Mark active licenses past their expiration date as expired"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        result = expire_licenses(dry_run=dry_run)

        self.stdout.write(f"Found {len(result.expired)} expired license(s)")
        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes will be made"))
            for serial in result.expired[:10]:
                self.stdout.write(f"  - {serial}")
            return

        self.stdout.write(
            # pylint: disable=no-member
            self.style.SUCCESS(
                f"Successfully marked {len(result.expired)} license(s) as expired, "
                f"revoked {result.sessions_revoked} session(s)"
            )
        )

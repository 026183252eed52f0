import logging

from django.core.management.base import BaseCommand, CommandError

from posts.factories import make_post
from posts.repositories import UserRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Fill the database with fake posts (each with a fresh owner unless --owner is given)."

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=100, help="Number of posts to create.")
        parser.add_argument("--owner", type=int, help="Id of an existing user to own every post.")

    def handle(self, *args, **options):
        count = options["count"]
        if count < 1:
            raise CommandError("--count must be at least 1")

        owner = None
        if options["owner"] is not None:
            owner = UserRepository().get(options["owner"])
            if owner is None:
                raise CommandError(f"User {options['owner']} does not exist")

        logger.info("Seeding %s posts", count)
        for _ in range(count):
            make_post(user=owner)

        self.stdout.write(self.style.SUCCESS(f"Created {count} posts."))

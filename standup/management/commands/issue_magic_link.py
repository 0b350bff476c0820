from django.core.management.base import BaseCommand, CommandError

from standup.exceptions.auth_exceptions import TokenInvalidError
from standup.exceptions.user_exceptions import EmailNotAllowedException
from standup.services.auth_service import AuthService


class Command(BaseCommand):
    help = "Print a sign-in link for an email address. Links expire after MAGIC_LINK_LIFETIME seconds."

    def add_arguments(self, parser):
        parser.add_argument("email", help="Email address to sign in as")

    def handle(self, *args, **options):
        try:
            link = AuthService.build_magic_link(options["email"])
        except (EmailNotAllowedException, TokenInvalidError) as e:
            raise CommandError(e.message)

        self.stdout.write(self.style.SUCCESS(link))

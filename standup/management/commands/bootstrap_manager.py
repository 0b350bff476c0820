from django.core.management.base import BaseCommand

from standup.services.team_service import TeamService


class Command(BaseCommand):
    help = (
        "Create the first team and its manager, or repair the configured manager's team. "
        "Uses BOOTSTRAP_MANAGER_EMAIL / INITIAL_MANAGER_EMAIL when set."
    )

    def add_arguments(self, parser):
        parser.add_argument("--email", help="Manager email when no bootstrap email is configured")
        parser.add_argument("--name", help="Manager display name")

    def handle(self, *args, **options):
        user = TeamService.ensure_bootstrap_team_and_manager(email=options.get("email"), name=options.get("name"))
        if user is None:
            self.stdout.write(self.style.WARNING("Nothing to bootstrap."))
            return

        self.stdout.write(
            self.style.SUCCESS(f"Manager {user.email} ({user.id}) is set up on team {user.active_team_id}.")
        )

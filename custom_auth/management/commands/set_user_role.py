from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from custom_auth.models import UserRole


class Command(BaseCommand):
    help = 'Grant or revoke back-office access by setting a user\'s role claim'

    def add_arguments(self, parser):
        parser.add_argument('username')
        parser.add_argument('role', choices=[choice for choice, _ in UserRole.ROLE_CHOICES])
        parser.add_argument(
            '--dry-run',
            action='store_true',
            dest='dry_run',
            help='Show what would be done without actually making changes',
        )

    def handle(self, *args, **options):
        User = get_user_model()
        try:
            user = User.objects.get(username=options['username'])
        except User.DoesNotExist:
            raise CommandError(f"User {options['username']!r} does not exist")

        role = UserRole.objects.filter(user=user).first()
        current = role.current_role if role else None
        if current == options['role']:
            self.stdout.write(self.style.SUCCESS(f'{user.username} already has role {current}.'))
            return

        if options['dry_run']:
            self.stdout.write(self.style.WARNING('DRY RUN - No changes will be made'))
            self.stdout.write(f'Would set role for {user.username}: {current} -> {options["role"]}')
            return

        UserRole.objects.update_or_create(user=user, defaults={'current_role': options['role']})
        self.stdout.write(self.style.SUCCESS(f'Set role for {user.username}: {current} -> {options["role"]}'))

import uuid

from django.core.management.base import BaseCommand, CommandError

from chefs.models import Chef
from chefs.services import chef_paths, refresh_chef_rating_stats
from utils.page_cache import revalidate_path


class Command(BaseCommand):
    help = 'Recompute rating stats from published reviews for one chef or all non-deleted chefs'

    def add_arguments(self, parser):
        parser.add_argument('--chef', dest='chef_id', type=uuid.UUID, help='Only refresh this chef')

    def handle(self, *args, **options):
        chefs = Chef.objects.not_deleted()
        if options['chef_id']:
            chefs = chefs.filter(pk=options['chef_id'])
            if not chefs.exists():
                raise CommandError(f"Chef {options['chef_id']} not found")

        refreshed = 0
        for chef_id in chefs.values_list('id', flat=True):
            stats = refresh_chef_rating_stats(chef_id)
            revalidate_path(*chef_paths(chef_id))
            refreshed += 1
            self.stdout.write(f'{chef_id}: {stats.review_count} reviews, avg {stats.avg_rating}')

        self.stdout.write(self.style.SUCCESS(f'Refreshed rating stats for {refreshed} chefs.'))

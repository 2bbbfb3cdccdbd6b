import logging

from chefs.models import ChefAuditLog, ChefRatingStats
from utils.error_reporting import report_error

logger = logging.getLogger(__name__)


def chef_paths(chef_id):
    """Every cached page that shows a given chef."""
    return ('/admin', f'/admin/chefs/{chef_id}', f'/chef/{chef_id}', '/')


def refresh_chef_rating_stats(chef_id):
    """Recompute the chef's rating summary from published reviews."""
    stats = ChefRatingStats.refresh_for(chef_id)
    logger.info(f"Rating stats for chef {chef_id}: {stats.review_count} reviews, avg {stats.avg_rating}")
    return stats


def refresh_chef_rating_stats_quietly(chef_id) -> bool:
    """
    Best-effort refresh used after a review changes state.

    The review change has already committed, so a failure here is reported and
    left for the next refresh rather than surfaced to the caller.
    """
    try:
        refresh_chef_rating_stats(chef_id)
        return True
    except Exception as e:
        report_error(e, 'refresh_chef_rating_stats', extra_context={'chef_id': str(chef_id)})
        return False


def record_chef_audit(chef, action, admin_user=None, **metadata):
    return ChefAuditLog.objects.create(
        chef=chef,
        chef_name=chef.name,
        action=action,
        admin_user=admin_user if getattr(admin_user, 'is_authenticated', False) else None,
        metadata=metadata,
    )

from .blogs import blog_service, blogs_repo
from .categories import categories_repo, category_service
from .faq import faq_repo, faq_service
from .services import service_service, services_repo
from .stats import dashboard_stats, media_repo
from .users import seed_admin, user_service, users_repo

# every repository whose unique indexes are created at startup
ALL_REPOSITORIES = (services_repo, blogs_repo, categories_repo, faq_repo, media_repo, users_repo)

__all__ = [
    "ALL_REPOSITORIES",
    "blog_service",
    "blogs_repo",
    "category_service",
    "categories_repo",
    "faq_service",
    "faq_repo",
    "service_service",
    "services_repo",
    "media_repo",
    "user_service",
    "users_repo",
    "seed_admin",
    "dashboard_stats",
]

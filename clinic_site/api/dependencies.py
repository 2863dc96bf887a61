# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the database client and entity services are created once and shared through injection.
# The setup keeps routers thin and makes endpoint tests easy to override.
# Centralized construction also ensures one consistent API configuration is used.

from __future__ import annotations

from functools import lru_cache

from clinic_site.api.api_config import ApiConfig, get_api_config
from clinic_site.api.db_access import DatabaseClient
from clinic_site.api.services.blog_service import BlogService
from clinic_site.api.services.catalog_service import ServiceCatalogService
from clinic_site.api.services.department_service import DepartmentService
from clinic_site.api.services.faq_service import FaqService
from clinic_site.api.services.tag_service import TagService
from clinic_site.api.services.testimonial_service import TestimonialService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


@lru_cache(maxsize=1)
def get_blog_service() -> BlogService:
    return BlogService(db=get_database_client())


@lru_cache(maxsize=1)
def get_tag_service() -> TagService:
    return TagService(db=get_database_client())


@lru_cache(maxsize=1)
def get_department_service() -> DepartmentService:
    return DepartmentService(db=get_database_client())


@lru_cache(maxsize=1)
def get_faq_service() -> FaqService:
    return FaqService(db=get_database_client())


@lru_cache(maxsize=1)
def get_service_catalog_service() -> ServiceCatalogService:
    return ServiceCatalogService(db=get_database_client())


@lru_cache(maxsize=1)
def get_testimonial_service() -> TestimonialService:
    config = get_api_config()
    db_client = get_database_client()
    return TestimonialService(config=config, db=db_client)


def get_config() -> ApiConfig:
    return get_api_config()

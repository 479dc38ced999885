"""System checks for the ERROR_PAGES setting."""
from django.core.checks import Error
from django.core.exceptions import ImproperlyConfigured

from . import conf

_RESOLVERS = (
    ("error_pages.E001", "CONTEXT_GENERATOR", conf.resolve_context_generator),
    ("error_pages.E002", "ERROR_TYPE", conf.resolve_error_type),
    ("error_pages.E003", "TEMPLATE_MAPPING", conf.resolve_template_mapping),
    ("error_pages.E004", "TEMPLATE_EXTENSION", conf.resolve_template_extension),
)


def check_error_pages_settings(app_configs, **kwargs):
    try:
        conf.get_setting("ERROR_TYPE")
    except ImproperlyConfigured as e:
        return [Error(str(e), id="error_pages.E000")]

    errors = []
    for check_id, name, resolve in _RESOLVERS:
        try:
            resolve(conf.get_setting(name))
        except ImproperlyConfigured as e:
            errors.append(Error(str(e), id=check_id))
    return errors

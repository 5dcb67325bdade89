import inspect
import importlib
from typing import Dict, Optional
import logging

from .util import to_snake

logger = logging.getLogger(__name__)


def discover_classes(
    pkg_name: str,
    base_cls: type,
    exclude_abstract: bool = True,
    exclude_base: bool = True
) -> Dict[str, type]:
    """
    Discover classes extending base from pkg

    Args:
        pkg_name: package name (e.g. 'appforge.bases.apps')
        base_cls: base class (e.g. App)
        exclude_abstract: whether to exclude abstract classes
        exclude_base: whether to exclude base class itself

    Returns:
        dictionary {class name: class object}
    """
    discovered = {}

    try:
        module = importlib.import_module(pkg_name)
    except ImportError as e:
        logger.warning(f"Could not import {pkg_name}: {e}")
        return discovered

    for name, obj in inspect.getmembers(module, inspect.isclass):
        if exclude_base and obj is base_cls:
            continue
        if not issubclass(obj, base_cls):
            continue
        if exclude_abstract and inspect.isabstract(obj):
            continue
        discovered[name] = obj

    return discovered


def extract_app_info(cls_name: str) -> Optional[str]:
    """
    Extract application kind from class name

    Args:
        cls_name: class name (e.g. 'GoApp', 'DockerExternalApp')

    Returns:
        application kind (e.g. 'go', 'docker_external') or None
    """
    if not cls_name.endswith('App'):
        return None
    base_name = cls_name[:-3]
    if not base_name:
        return None
    return to_snake(base_name)

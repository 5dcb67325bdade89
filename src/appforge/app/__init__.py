"""
appforge Application Drivers

- App: capability interface every application kind implements
- TemplateData: materializes packaged asset trees into a build directory
- check_ready: infrastructure readiness gate used by Build
- DevDepCache: fingerprinted cache of dev dependency builds
"""

from .base import App
from .materializer import TemplateData
from .gate import check_ready, NOT_READY_MESSAGE
from .cache import DevDepCache, DevDepManifest

__all__ = [
    'App',
    'TemplateData',
    'check_ready',
    'NOT_READY_MESSAGE',
    'DevDepCache',
    'DevDepManifest',
]

from .contexts import ApplicationContext, InfraTuple
from .results import CompileResult, DevDep

__all__ = [
    'ApplicationContext',
    'InfraTuple',
    'CompileResult',
    'DevDep',
]

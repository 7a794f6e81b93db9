"""Registry of analyses by name

There is one registry per process, get it with
:meth:`AnalysisRegistry.instance`. The first call creates it and
registers the analyses shipped with this package, see
:func:`register_default_analyses`. Register your own analyses at start
up, before creating any::

    registry = AnalysisRegistry.instance()
    registry.register('my_analysis', MyAnalysis)
    analysis = registry.create('my_analysis')

Names can not be unregistered or replaced.

"""
import logging

from .multiplicity import MultiplicityAnalysis
from .spectrum import PtSpectrumAnalysis
from .yields import YieldsAnalysis

logger = logging.getLogger('particlestream.analysis.registry')


class AnalysisRegistry:

    """Map analysis names to factories creating new instances"""

    _instance = None

    def __init__(self):
        self._factories = {}

    @classmethod
    def instance(cls):
        """Get the process wide registry, creating it on first use"""

        if cls._instance is None:
            registry = cls()
            register_default_analyses(registry)
            cls._instance = registry
        return cls._instance

    def register(self, name, factory):
        """Register a factory under a name

        :param name: name of the analysis.
        :param factory: callable without arguments returning a new
                        :class:`~particlestream.analysis.base.Analysis`.
        :raises ValueError: if the name is already registered.

        """
        if name in self._factories:
            raise ValueError(f"Analysis '{name}' is already registered")
        self._factories[name] = factory
        logger.debug('Registered analysis %s.', name)

    def create(self, name):
        """Create a new analysis

        :return: the new analysis, or None if the name is not registered.

        """
        factory = self._factories.get(name)
        if factory is None:
            return None
        return factory()

    def get_factory(self, name):
        return self._factories.get(name)

    def names(self):
        return sorted(self._factories)

    def __contains__(self, name):
        return name in self._factories


def register_default_analyses(registry):
    """Register the analyses included in this package"""

    for analysis in (MultiplicityAnalysis, YieldsAnalysis,
                     PtSpectrumAnalysis):
        registry.register(analysis.name, analysis)

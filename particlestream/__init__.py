"""Streaming access to binary particle output of transport simulations

Transport simulations of heavy-ion collisions write their particles as a
binary stream of events, each holding a variable number of fixed-size
particle records. This package reads such streams in a single forward
pass and hands the decoded blocks to accessors and analyses.

The following packages and modules are included:

:mod:`~particlestream.accessors`
    consumers of decoded blocks

:mod:`~particlestream.analysis`
    package containing the analysis framework and analyses

:mod:`~particlestream.blocks`
    binary format and the blocks of a stream

:mod:`~particlestream.errors`
    exceptions

:mod:`~particlestream.layout`
    positions of quantities within a particle record

:mod:`~particlestream.particles`
    convert PDG particle codes to names

:mod:`~particlestream.quantities`
    catalog of the quantities a stream can carry

:mod:`~particlestream.reader`
    read binary particle streams

:mod:`~particlestream.storage`
    table descriptions for HDF5 storage

:mod:`~particlestream.store_particle_data`
    convert particle streams to HDF5 files

:mod:`~particlestream.tests`
    code tests

:mod:`~particlestream.writer`
    write binary particle streams

"""
from . import (
    accessors,
    analysis,
    blocks,
    errors,
    layout,
    particles,
    quantities,
    reader,
    storage,
    store_particle_data,
    writer,
)
from .accessors import Accessor, CollectorAccessor, DictCollectorAccessor, DispatchingAccessor
from .analysis import Analysis, AnalysisRegistry, run_analysis
from .blocks import EndBlock, ParticleBlock
from .errors import (
    LayoutNotInitializedError,
    MalformedStreamError,
    ParticleStreamError,
    StreamAlreadyConsumedError,
    TruncatedStreamError,
    UnknownAnalysisError,
    UnknownQuantityError,
)
from .layout import RecordLayout
from .quantities import Quantity, QuantityInfo, QuantityType
from .reader import BinaryReader
from .tests import run_tests
from .writer import BinaryWriter

__all__ = [
    'Accessor',
    'Analysis',
    'AnalysisRegistry',
    'BinaryReader',
    'BinaryWriter',
    'CollectorAccessor',
    'DictCollectorAccessor',
    'DispatchingAccessor',
    'EndBlock',
    'LayoutNotInitializedError',
    'MalformedStreamError',
    'ParticleBlock',
    'ParticleStreamError',
    'Quantity',
    'QuantityInfo',
    'QuantityType',
    'RecordLayout',
    'StreamAlreadyConsumedError',
    'TruncatedStreamError',
    'UnknownAnalysisError',
    'UnknownQuantityError',
    'accessors',
    'analysis',
    'blocks',
    'errors',
    'layout',
    'particles',
    'quantities',
    'reader',
    'run_analysis',
    'run_tests',
    'storage',
    'store_particle_data',
    'writer',
]

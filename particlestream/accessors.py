""" Consumers of decoded particle blocks

    An accessor is handed every block of a stream by the
    :class:`~particlestream.reader.BinaryReader`. Subclass
    :class:`Accessor` and override :meth:`~Accessor.on_particle_block`
    and/or :meth:`~Accessor.on_end_block`::

        class CountingAccessor(Accessor):
            def __init__(self):
                super().__init__()
                self.n = 0

            def on_particle_block(self, block):
                self.n += block.npart

    The blocks are only valid during the callback. Copy anything you want
    to keep, :meth:`ParticleBlock.column
    <particlestream.blocks.ParticleBlock.column>` and
    :meth:`RecordLayout.decode_record
    <particlestream.layout.RecordLayout.decode_record>` both return copies.

    Available accessors:

    * :class:`CollectorAccessor`: one numpy column per quantity.
    * :class:`DictCollectorAccessor`: one dict per particle.
    * :class:`DispatchingAccessor`: forward blocks to several accessors.

"""
import numpy

from .errors import LayoutNotInitializedError
from .quantities import QuantityType, info


class Accessor:

    """Base class for stream consumers

    Both callbacks do nothing by default.

    """

    def __init__(self):
        self._layout = None

    def set_layout(self, layout):
        """Called by the reader with the layout, before the first block"""
        self._layout = layout

    @property
    def layout(self):
        """The RecordLayout of the stream being read

        :raises LayoutNotInitializedError: if the reader has not set it.

        """
        layout = getattr(self, '_layout', None)
        if layout is None:
            raise LayoutNotInitializedError(
                f'Layout not initialized for {type(self).__name__}')
        return layout

    def on_particle_block(self, block):
        pass

    def on_end_block(self, block):
        pass

    def get_int(self, name):
        """Get a named integer result exposed by the accessor"""
        raise KeyError(f"{type(self).__name__} has no int named '{name}'")

    def get_double(self, name):
        """Get a named floating point result exposed by the accessor"""
        raise KeyError(f"{type(self).__name__} has no double named '{name}'")


class CollectorAccessor(Accessor):

    """Collect the requested quantities into flat columns

    Values of all events are concatenated. Use :meth:`get_event_sizes` to
    find which values belong to which event::

        sizes = accessor.get_event_sizes()
        px_per_event = numpy.split(accessor.get_double_array('px'),
                                   numpy.cumsum(sizes)[:-1])

    """

    def __init__(self):
        super().__init__()
        self.column_names = []
        self._doubles = {}
        self._ints = {}
        self._event_sizes = []

    def on_particle_block(self, block):
        layout = self.layout
        self._event_sizes.append(block.npart)
        for quantity, _ in layout:
            name = quantity.name
            if info(quantity).type is QuantityType.Double:
                columns = self._doubles
            else:
                columns = self._ints
            if name not in columns:
                columns[name] = []
                self.column_names.append(name)
            if block.npart:
                columns[name].append(block.column(name))

    def get_double_array(self, name):
        """Get all values of a floating point quantity

        :raises KeyError: if no values of that quantity were collected.

        """
        return self._get_column(self._doubles, name, numpy.float64)

    def get_int_array(self, name):
        """Get all values of an integer quantity

        :raises KeyError: if no values of that quantity were collected.

        """
        return self._get_column(self._ints, name, numpy.int32)

    def get_event_sizes(self):
        """Number of particles in each particle block, in stream order"""
        return numpy.array(self._event_sizes, dtype=numpy.int64)

    def get_int(self, name):
        if name == 'n_events':
            return len(self._event_sizes)
        elif name == 'n_particles':
            return sum(self._event_sizes)
        return super().get_int(name)

    def _get_column(self, columns, name, dtype):
        chunks = columns[name]
        if not chunks:
            return numpy.zeros(0, dtype=dtype)
        if len(chunks) > 1:
            chunks[:] = [numpy.concatenate(chunks)]
        return numpy.array(chunks[0], dtype=dtype)


class DictCollectorAccessor(Accessor):

    """Collect every particle as a dict of quantity name to value

    Convenient for small streams, but much slower and larger than
    :class:`CollectorAccessor`.

    """

    def __init__(self):
        super().__init__()
        self.particles = []

    def on_particle_block(self, block):
        layout = self.layout
        for record in block.records():
            self.particles.append(layout.decode_record(record))

    def get_particle_dicts(self):
        return list(self.particles)

    def get_int(self, name):
        if name == 'n_particles':
            return len(self.particles)
        return super().get_int(name)


class DispatchingAccessor(Accessor):

    """Forward every block to a list of accessors

    Typically the members are :class:`~particlestream.analysis.base.Analysis`
    instances. They are called in registration order with the same block.
    An exception raised by a member is not caught, it stops the read.

    """

    def __init__(self, analyses=()):
        super().__init__()
        self.analyses = []
        for analysis in analyses:
            self.register_analysis(analysis)

    def register_analysis(self, analysis):
        """Add an analysis (or any accessor) to the end of the list"""

        self.analyses.append(analysis)
        if self._layout is not None:
            analysis.set_layout(self._layout)
        return analysis

    def set_layout(self, layout):
        super().set_layout(layout)
        for analysis in self.analyses:
            analysis.set_layout(layout)

    def on_particle_block(self, block):
        for analysis in self.analyses:
            analysis.on_particle_block(block)

    def on_end_block(self, block):
        for analysis in self.analyses:
            analysis.on_end_block(block)

    def __iter__(self):
        return iter(self.analyses)

    def __len__(self):
        return len(self.analyses)

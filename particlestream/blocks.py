"""
Classes corresponding to the blocks of a particle stream

A stream starts with a file header, followed by one section per event:

* a particle block header: ``b'p'``, event number, ensemble number and
  the number of particles,
* that many particle records of a fixed size (the stride),
* an end block: ``b'f'``, event number and impact parameter.

All values are little-endian without padding.

"""
import struct

import numpy

# All sizes are in bytes


class Format:

    """The binary format information of a stream."""

    def __init__(self):
        self.magic = b'PSTR'
        self.version = 1

        # magic and format version
        self.header_format = '<4sH'
        self.header_size = struct.calcsize(self.header_format)

        # one (quantity tag, offset) pair of the layout table
        # a pair with tag end_of_layout terminates the table, its offset
        # field holds the record stride
        self.layout_entry_format = '<ii'
        self.layout_entry_size = struct.calcsize(self.layout_entry_format)
        self.end_of_layout = -1

        # tag, event number, ensemble number, number of particles
        self.particle_block_tag = b'p'
        self.particle_block_format = '<ciii'
        self.particle_block_size = struct.calcsize(self.particle_block_format)

        # tag, event number, impact parameter
        self.end_block_tag = b'f'
        self.end_block_format = '<cid'
        self.end_block_size = struct.calcsize(self.end_block_format)


class FileHeader:

    """The file header

    :param version: format version of the file.
    :param entries: list of (tag, offset) pairs as found in the file.
    :param stride: size of one particle record.

    """

    def __init__(self, version, entries, stride):
        self.version = version
        self.entries = entries
        self.stride = stride

    def __repr__(self):
        return (f'FileHeader(version={self.version}, '
                f'entries={self.entries}, stride={self.stride})')


class ParticleBlock:

    """The particles of one event

    The particle records are exposed as a read-only view on a buffer
    owned by the reader. The buffer is reused for the next block, so
    copy anything you want to keep before the callback returns.

    """

    def __init__(self, event_number, ensamble_number, npart, data, layout):
        self.event_number = event_number
        self.ensamble_number = ensamble_number
        self.npart = npart
        self.data = data
        self.layout = layout

    @property
    def ensemble_number(self):
        return self.ensamble_number

    def record(self, index):
        """Get the bytes of a single particle record

        :param index: particle index within the block.
        :return: memoryview of :attr:`layout.stride <RecordLayout.stride>`
                 bytes.

        """
        if not 0 <= index < self.npart:
            raise IndexError(f'Particle index {index} out of range for a '
                             f'block of {self.npart} particles')
        stride = self.layout.stride
        return self.data[index * stride:(index + 1) * stride]

    def records(self):
        """Generator over all particle records in the block"""

        for index in range(self.npart):
            yield self.record(index)

    def to_array(self):
        """Decode all particles into a numpy structured array

        The array is a copy and may be retained.

        """
        if not self.npart:
            return numpy.zeros(0, dtype=self.layout.dtype)
        return numpy.frombuffer(self.data, dtype=self.layout.dtype,
                                count=self.npart).copy()

    def column(self, name):
        """Decode one quantity for all particles in the block

        :param name: field name of a quantity in the layout.
        :return: a new contiguous numpy array.
        :raises KeyError: if the quantity is not in the layout.

        """
        dtype = self.layout.dtype
        if not dtype.names or name not in dtype.names:
            raise KeyError(name)
        if not self.npart:
            return numpy.zeros(0, dtype=dtype[name])
        particles = numpy.frombuffer(self.data, dtype=dtype, count=self.npart)
        return particles[name].copy()

    def __repr__(self):
        return (f'ParticleBlock(event_number={self.event_number}, '
                f'ensamble_number={self.ensamble_number}, '
                f'npart={self.npart})')


class EndBlock:

    """The end of an event"""

    def __init__(self, event_number, impact_parameter):
        self.event_number = event_number
        self.impact_parameter = impact_parameter

    def __repr__(self):
        return (f'EndBlock(event_number={self.event_number}, '
                f'impact_parameter={self.impact_parameter})')

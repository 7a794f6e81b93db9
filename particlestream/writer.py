""" Write binary particle streams

    Produces files in the format read by
    :class:`~particlestream.reader.BinaryReader`. Useful to create
    synthetic streams, for example for tests::

        with open('test.bin', 'wb') as stream:
            writer = BinaryWriter(stream, ['px', 'pdg_id'])
            writer.write_header()
            writer.write_event(1, 0, [{'px': 0.1, 'pdg_id': 211}],
                               impact_parameter=2.5)

"""
import struct

from .blocks import Format
from .layout import RecordLayout
from .quantities import resolve


class BinaryWriter:

    """Write a particle stream to an open binary file

    :param stream: file object opened for binary writing.
    :param quantities: ordered names of the quantities in each record.
    :param offsets: optional byte offsets, one per quantity. By default
                    the quantities are packed in the given order.
    :param stride: optional record size, by default the packed size.
    :param extra_entries: additional raw (tag, offset) pairs written to
                          the layout table, e.g. quantities unknown to
                          this version.

    """

    def __init__(self, stream, quantities, offsets=None, stride=None,
                 extra_entries=()):
        self.stream = stream
        self.format = Format()
        infos = resolve(quantities)
        if offsets is None:
            offsets = []
            position = 0
            for quantity_info in infos:
                offsets.append(position)
                position += quantity_info.type.size
            if stride is None:
                stride = position
        elif stride is None:
            stride = max([offset + quantity_info.type.size
                          for offset, quantity_info in zip(offsets, infos)],
                         default=0)
        self._types = {quantity_info.quantity: quantity_info.type
                       for quantity_info in infos}
        self.layout = RecordLayout(
            [(quantity_info.quantity, offset)
             for quantity_info, offset in zip(infos, offsets)], stride)
        self.extra_entries = list(extra_entries)

    def write_header(self):
        fmt = self.format
        self.stream.write(struct.pack(fmt.header_format, fmt.magic,
                                      fmt.version))
        for quantity, offset in self.layout:
            self.stream.write(struct.pack(fmt.layout_entry_format,
                                          int(quantity), offset))
        for tag, offset in self.extra_entries:
            self.stream.write(struct.pack(fmt.layout_entry_format, tag,
                                          offset))
        self.stream.write(struct.pack(fmt.layout_entry_format,
                                      fmt.end_of_layout, self.layout.stride))

    def write_event(self, event_number, ensemble_number, particles,
                    impact_parameter=0.0):
        """Write the particle block and end block of one event

        :param particles: sequence of mappings of quantity name to value.
                          Missing quantities are written as zero.

        """
        self.write_particle_block(event_number, ensemble_number, particles)
        self.write_end_block(event_number, impact_parameter)

    def write_particle_block(self, event_number, ensemble_number, particles):
        fmt = self.format
        self.stream.write(struct.pack(fmt.particle_block_format,
                                      fmt.particle_block_tag, event_number,
                                      ensemble_number, len(particles)))
        for particle in particles:
            self.stream.write(self.pack_record(particle))

    def write_end_block(self, event_number, impact_parameter):
        fmt = self.format
        self.stream.write(struct.pack(fmt.end_block_format,
                                      fmt.end_block_tag, event_number,
                                      impact_parameter))

    def pack_record(self, particle):
        """Pack a mapping of quantity name to value into a record"""

        record = bytearray(self.layout.stride)
        for quantity, offset in self.layout:
            struct.pack_into(self._types[quantity].format, record, offset,
                             particle.get(quantity.name, 0))
        return bytes(record)


def write_stream(filename, quantities, events, **kwargs):
    """Write a complete stream to a file

    :param filename: path of the new file.
    :param quantities: ordered names of the quantities in each record.
    :param events: iterable of (event_number, ensemble_number, particles,
                   impact_parameter) tuples.
    :param kwargs: passed on to :class:`BinaryWriter`.

    """
    with open(filename, 'wb') as stream:
        writer = BinaryWriter(stream, quantities, **kwargs)
        writer.write_header()
        for event_number, ensemble_number, particles, impact_parameter \
                in events:
            writer.write_event(event_number, ensemble_number, particles,
                               impact_parameter)
    return writer.layout

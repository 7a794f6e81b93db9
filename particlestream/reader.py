""" Read binary particle streams

    This module provides :class:`BinaryReader`, which makes a single
    forward pass over a particle stream and hands every decoded block to
    an :class:`~particlestream.accessors.Accessor`::

        from particlestream.accessors import CollectorAccessor
        from particlestream.reader import BinaryReader

        accessor = CollectorAccessor()
        reader = BinaryReader('particles_binary.bin', ['px', 'pdg_id'],
                              accessor)
        reader.read()
        px = accessor.get_double_array('px')

    The reader never seeks. The particle records of a block are read into
    a single buffer which is reused for the next block, so accessors have
    to copy any data they want to keep.

    The format is described in :mod:`~particlestream.blocks`.

"""
import logging
import os
import struct

from progressbar import ProgressBar, ETA, Bar, Percentage

from .quantities import Quantity, resolve
from .blocks import Format, FileHeader, ParticleBlock, EndBlock
from .errors import (MalformedStreamError, TruncatedStreamError,
                     StreamAlreadyConsumedError)
from .layout import RecordLayout

logger = logging.getLogger('particlestream.reader')


class BinaryReader:

    """Stream particle data to an accessor

    :param filename: path of the binary stream.
    :param quantities: ordered names of the quantities to decode.
    :param accessor: the :class:`~particlestream.accessors.Accessor`
                     which receives the blocks.
    :param progress: if True, show a progressbar while reading.
    :raises UnknownQuantityError: if one of the names is not a known
                                  quantity. The file is not opened.

    """

    def __init__(self, filename, quantities, accessor, progress=False):
        self._filename = filename
        self._requested = resolve(quantities)
        self.quantities = [info.quantity.name for info in self._requested]
        self.accessor = accessor
        self.progress = progress
        self.format = Format()
        self.header = None
        self.layout = None
        self.n_events = 0
        self.n_particles = 0
        self._consumed = False
        self._size = None
        self._buffer = bytearray()

    def read(self):
        """Read the complete stream

        Can only be called once per reader.

        :raises StreamAlreadyConsumedError: on the second call.
        :raises MalformedStreamError: if the stream is corrupt or truncated.

        """
        if self._consumed:
            raise StreamAlreadyConsumedError(
                f"Stream already consumed: '{self._filename}'")
        self._consumed = True

        size = self._size = os.path.getsize(self._filename)
        logger.info('Reading particle stream %s (%d bytes).',
                    self._filename, size)
        with open(self._filename, 'rb') as stream:
            self.header = self._read_file_header(stream)
            file_layout = self._get_file_layout(self.header)
            logger.debug('File layout: %r', file_layout)
            self.layout = file_layout.restrict(self._requested)
            self.accessor.set_layout(self.layout)

            if self.progress:
                pbar = ProgressBar(max_value=size,
                                   widgets=[Percentage(), Bar(), ETA()]).start()

            while True:
                block = self._read_particle_block(stream)
                if block is None:
                    break
                self.accessor.on_particle_block(block)

                end = self._read_end_block(stream, block.event_number)
                self.accessor.on_end_block(end)

                self.n_events += 1
                self.n_particles += block.npart
                if self.progress:
                    pbar.update(stream.tell())

            if self.progress:
                pbar.finish()

        logger.info('Finished reading %s: %d events, %d particles.',
                    self._filename, self.n_events, self.n_particles)

    def _read_file_header(self, stream):
        """Read the magic, version and layout table"""

        fmt = self.format
        magic, version = struct.unpack(
            fmt.header_format,
            self._read_exact(stream, fmt.header_size, 'file header'))
        if magic != fmt.magic:
            raise MalformedStreamError(
                f'Bad magic {magic!r}, expected {fmt.magic!r}',
                offset=0, stage='file header')
        if version != fmt.version:
            raise MalformedStreamError(
                f'Unsupported format version {version}',
                offset=len(magic), stage='file header')

        entries = []
        while True:
            tag, offset = struct.unpack(
                fmt.layout_entry_format,
                self._read_exact(stream, fmt.layout_entry_size,
                                 'file header'))
            if tag == fmt.end_of_layout:
                return FileHeader(version, entries, stride=offset)
            entries.append((tag, offset))

    def _get_file_layout(self, header):
        """Build the layout of all known quantities in the file"""

        known = []
        for tag, offset in header.entries:
            try:
                known.append((Quantity(tag), offset))
            except ValueError:
                logger.warning('Skipping unknown quantity tag %d at offset '
                               '%d in %s.', tag, offset, self._filename)
        return RecordLayout(known, header.stride)

    def _read_particle_block(self, stream):
        """Read the next particle block

        :return: a ParticleBlock, or None at the end of the stream.

        """
        fmt = self.format
        position = stream.tell()
        raw = self._read_exact(stream, fmt.particle_block_size,
                               'particle block header', allow_eof=True)
        if raw is None:
            return None
        tag, event_number, ensemble_number, npart = struct.unpack(
            fmt.particle_block_format, raw)
        if tag != fmt.particle_block_tag:
            raise MalformedStreamError(
                f'Expected particle block, found tag {tag!r}',
                offset=position, stage='particle block header')
        if npart < 0:
            raise MalformedStreamError(
                f'Negative particle count {npart} in event {event_number}',
                offset=position, stage='particle block header')

        size = npart * self.layout.stride
        remaining = self._size - stream.tell()
        if size > remaining:
            raise TruncatedStreamError(
                f'Particle block of event {event_number} needs {size} bytes, '
                f'only {remaining} left', offset=position,
                stage='particle block header')
        if len(self._buffer) < size:
            # Replace instead of resize, accessors may still hold views
            self._buffer = bytearray(size)
        view = memoryview(self._buffer)[:size]
        self._read_into(stream, view, f'particle records of event '
                                      f'{event_number}')
        return ParticleBlock(event_number, ensemble_number, npart,
                             view.toreadonly(), self.layout)

    def _read_end_block(self, stream, event_number):
        fmt = self.format
        position = stream.tell()
        tag, end_event_number, impact_parameter = struct.unpack(
            fmt.end_block_format,
            self._read_exact(stream, fmt.end_block_size, 'end block'))
        if tag != fmt.end_block_tag:
            raise MalformedStreamError(
                f'Expected end block for event {event_number}, found tag '
                f'{tag!r}', offset=position, stage='end block')
        if end_event_number != event_number:
            raise MalformedStreamError(
                f'End block of event {end_event_number} follows particles of '
                f'event {event_number}', offset=position, stage='end block')
        return EndBlock(end_event_number, impact_parameter)

    def _read_exact(self, stream, size, stage, allow_eof=False):
        """Read exactly size bytes

        :param allow_eof: if True, return None when the stream ends
                          before the first byte.

        """
        position = stream.tell()
        data = stream.read(size)
        if not data and allow_eof:
            return None
        if len(data) != size:
            raise TruncatedStreamError(
                f'Stream ended after {len(data)} of {size} bytes',
                offset=position, stage=stage)
        return data

    def _read_into(self, stream, view, stage):
        position = stream.tell()
        n_read = 0
        while n_read < len(view):
            count = stream.readinto(view[n_read:])
            if not count:
                raise TruncatedStreamError(
                    f'Stream ended after {n_read} of {len(view)} bytes',
                    offset=position, stage=stage)
            n_read += count

""" Store binary particle streams in HDF5 files

    This module reads a binary particle stream and stores each particle
    individually in a HDF5 file, using PyTables. The file gets two
    tables:

    * ``/particles``: event number, ensemble number and one column per
      decoded quantity for every particle.
    * ``/events``: event number, ensemble number, number of particles and
      impact parameter for every event.

    The syntax and options for calling this script can be seen with::

        $ store_particle_data --help

    For example to convert the momenta and particle codes of a stream
    called particles_binary.bin to a HDF5 file called particles.h5 with
    a progress bar run::

        $ store_particle_data --progress particles_binary.bin particles.h5 \\
              -q px py pz pdg_id

"""
import argparse
import logging
import os

import numpy
import tables

from .accessors import Accessor
from .errors import UsageError
from .quantities import DEFAULT_QUANTITIES, resolve
from .reader import BinaryReader
from .storage import EventSummary, particle_description

logger = logging.getLogger('particlestream.store_particle_data')


class ParticleTableAccessor(Accessor):

    """Append the particles and events of a stream to PyTables tables

    The tables are created when the reader sets the layout, because the
    particle columns depend on the quantities present in the file.

    :param destination: PyTables file instance of the destination file.

    """

    def __init__(self, destination, particles_table='particles',
                 events_table='events'):
        super().__init__()
        self.destination = destination
        self.particles_table = particles_table
        self.events_table = events_table
        self.particles = None
        self.events = None
        self._current = None

    def set_layout(self, layout):
        super().set_layout(layout)
        self.particles = self.destination.create_table(
            '/', self.particles_table, particle_description(layout),
            'All particles')
        self.events = self.destination.create_table(
            '/', self.events_table, EventSummary, 'All events')

    def on_particle_block(self, block):
        self._current = block.event_number, block.ensamble_number, block.npart
        if not block.npart:
            return
        decoded = block.to_array()
        rows = numpy.zeros(block.npart, dtype=self.particles.dtype)
        rows['event_number'] = block.event_number
        rows['ensemble_number'] = block.ensamble_number
        for name in self.layout.names:
            rows[name] = decoded[name]
        self.particles.append(rows)

    def on_end_block(self, block):
        if self._current is None:
            raise UsageError(
                f'End block of event {block.event_number} without a '
                'preceding particle block')
        event_number, ensemble_number, npart = self._current
        row = self.events.row
        row['event_number'] = event_number
        row['ensemble_number'] = ensemble_number
        row['npart'] = npart
        row['impact_parameter'] = block.impact_parameter
        row.append()
        self._current = None

    def flush(self):
        if self.particles is not None:
            self.particles.flush()
            self.events.flush()


def store_particle_data(source, destination, quantities=DEFAULT_QUANTITIES,
                        overwrite=False, progress=False):
    """Store the particles of a binary stream in a HDF5 file

    :param source: path of the binary particle stream.
    :param destination: path of the HDF5 destination file.
    :param quantities: names of the quantities to store.
    :param overwrite: if True, replace an existing destination.
    :param progress: show a progressbar while reading.
    :raises FileExistsError: if the destination exists and overwrite is
                             False.

    """
    resolve(quantities)
    if os.path.exists(destination):
        if not overwrite:
            raise FileExistsError(f"Destination '{destination}' already "
                                  f"exists, doing nothing")
        os.remove(destination)

    if progress:
        print(f'Converting particle stream ({source}) to HDF5 format')
    try:
        with tables.open_file(destination, 'w') as data:
            accessor = ParticleTableAccessor(data)
            reader = BinaryReader(source, quantities, accessor,
                                  progress=progress)
            reader.read()
            accessor.flush()
            data.root._v_attrs.source = source
            data.root._v_attrs.format_version = reader.header.version
            data.root._v_attrs.quantities = reader.layout.names
            data.root._v_attrs.missing_quantities = list(reader.layout.missing)
    except Exception:
        logger.error('Failed to convert %s, removing %s.', source,
                     destination)
        if os.path.exists(destination):
            os.remove(destination)
        raise

    logger.info('Stored %d particles of %d events in %s.',
                reader.n_particles, reader.n_events, destination)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Store a binary particle stream in a HDF5 file.')
    parser.add_argument('source', help="path of the binary particle stream")
    parser.add_argument('destination',
                        help="path of the HDF5 destination file")
    parser.add_argument('-q', '--quantities', nargs='+',
                        default=list(DEFAULT_QUANTITIES),
                        help='quantities to store')
    parser.add_argument('--overwrite', action='store_true',
                        help='overwrite destination file if it already exists')
    parser.add_argument('--progress', action='store_true',
                        help='show progressbar during conversion')
    parser.add_argument('--log', metavar='FILE',
                        help='write logs to this file')
    args = parser.parse_args(argv)
    if args.log:
        logging.basicConfig(filename=args.log, filemode='a',
                            format='%(asctime)s %(name)s %(levelname)s: '
                                   '%(message)s',
                            datefmt='%y%m%d_%H%M%S', level=logging.INFO)

    store_particle_data(args.source, args.destination, args.quantities,
                        args.overwrite, args.progress)


if __name__ == '__main__':
    main()

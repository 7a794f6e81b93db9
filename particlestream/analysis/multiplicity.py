"""Particle multiplicity per event

Records the number of particles and the impact parameter of every event
in the stream. This needs no quantities to be decoded.

"""
import logging

import numpy
import tables

from .base import Analysis
from ..errors import UsageError
from ..storage import EventSummary

logger = logging.getLogger('particlestream.analysis.multiplicity')


class MultiplicityAnalysis(Analysis):

    name = 'multiplicity'

    def __init__(self):
        super().__init__()
        self.events = []
        self._current = None

    def on_particle_block(self, block):
        self._current = (block.event_number, block.ensamble_number,
                         block.npart)

    def on_end_block(self, block):
        if self._current is None:
            raise UsageError(
                f'End block of event {block.event_number} without a '
                'preceding particle block')
        event_number, ensemble_number, npart = self._current
        self.events.append((event_number, ensemble_number, npart,
                            block.impact_parameter))
        self._current = None

    @property
    def multiplicities(self):
        return numpy.array([event[2] for event in self.events],
                           dtype=numpy.int64)

    @property
    def impact_parameters(self):
        return numpy.array([event[3] for event in self.events])

    def save(self, path, table_name='events'):
        with tables.open_file(path, 'a') as data:
            table = data.create_table('/', table_name, EventSummary,
                                      'Particle multiplicity per event',
                                      expectedrows=max(len(self.events), 1))
            row = table.row
            for event_number, ensemble_number, npart, b in self.events:
                row['event_number'] = event_number
                row['ensemble_number'] = ensemble_number
                row['npart'] = npart
                row['impact_parameter'] = b
                row.append()
            table.flush()
        logger.info('Stored %d events in %s:/%s.', len(self.events), path,
                    table_name)

    def print_result_to(self, sink):
        n_events = len(self.events)
        sink.write(f'Events: {n_events}\n')
        if not n_events:
            return
        multiplicities = self.multiplicities
        sink.write(f'Particles: {multiplicities.sum()}\n')
        sink.write(f'Multiplicity: mean {multiplicities.mean():.3f}, '
                   f'min {multiplicities.min()}, '
                   f'max {multiplicities.max()}\n')
        sink.write(f'Impact parameter: mean '
                   f'{self.impact_parameters.mean():.3f}\n')

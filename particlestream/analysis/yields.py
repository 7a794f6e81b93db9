"""Particle yields per species

Counts the particles of every PDG code in the stream. Requires the
'pdg_id' quantity, streams without it yield no counts.

"""
from collections import Counter
import logging

import numpy
import tables

from .base import Analysis
from .. import particles
from ..quantities import Quantity
from ..storage import ParticleYield

logger = logging.getLogger('particlestream.analysis.yields')


class YieldsAnalysis(Analysis):

    name = 'yields'
    quantities = ('pdg_id',)

    def __init__(self):
        super().__init__()
        self.counts = Counter()
        self.n_events = 0

    def on_particle_block(self, block):
        if Quantity.pdg_id not in self.layout or not block.npart:
            return
        pdg_ids, counts = numpy.unique(block.column('pdg_id'),
                                       return_counts=True)
        for pdg_id, count in zip(pdg_ids.tolist(), counts.tolist()):
            self.counts[pdg_id] += count

    def on_end_block(self, block):
        self.n_events += 1

    def species(self):
        """(pdg_id, count) pairs, most abundant first"""

        return sorted(self.counts.items(), key=lambda item: (-item[1],
                                                             item[0]))

    def save(self, path, table_name='yields'):
        with tables.open_file(path, 'a') as data:
            table = data.create_table('/', table_name, ParticleYield,
                                      'Particle yields per species',
                                      expectedrows=max(len(self.counts), 1))
            row = table.row
            for pdg_id, count in self.species():
                row['pdg_id'] = pdg_id
                row['count'] = count
                row.append()
            table.flush()
            table.attrs.n_events = self.n_events
        logger.info('Stored yields of %d species in %s:/%s.',
                    len(self.counts), path, table_name)

    def print_result_to(self, sink):
        sink.write(f'Events: {self.n_events}\n')
        sink.write('%-20s %12s %12s %12s\n' % ('particle', 'pdg_id', 'count',
                                               'per event'))
        for pdg_id, count in self.species():
            per_event = count / self.n_events if self.n_events else 0.
            sink.write('%-20s %12d %12d %12.4f\n' % (particles.name(pdg_id),
                                                     pdg_id, count,
                                                     per_event))

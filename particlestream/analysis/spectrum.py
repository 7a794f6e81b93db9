"""Transverse momentum spectrum

Histograms the transverse momentum, sqrt(px ** 2 + py ** 2), of all
particles. Requires the 'px' and 'py' quantities.

"""
import logging

import numpy
import tables

from .base import Analysis
from ..quantities import Quantity

logger = logging.getLogger('particlestream.analysis.spectrum')

#: Bin edges in GeV.
PT_BINS = numpy.linspace(0., 5., 51)


class PtSpectrumAnalysis(Analysis):

    name = 'pt_spectrum'
    quantities = ('px', 'py')

    def __init__(self, bins=PT_BINS):
        super().__init__()
        self.bin_edges = numpy.asarray(bins, dtype=numpy.float64)
        self.counts = numpy.zeros(len(self.bin_edges) - 1, dtype=numpy.int64)
        self.n_events = 0

    def on_particle_block(self, block):
        layout = self.layout
        if (Quantity.px not in layout or Quantity.py not in layout or
                not block.npart):
            return
        pt = numpy.hypot(block.column('px'), block.column('py'))
        counts, _ = numpy.histogram(pt, bins=self.bin_edges)
        self.counts += counts

    def on_end_block(self, block):
        self.n_events += 1

    def density(self):
        """dN/dpt per event for each bin"""

        if not self.n_events:
            return numpy.zeros(len(self.counts))
        return self.counts / numpy.diff(self.bin_edges) / self.n_events

    def save(self, path, group_name='pt_spectrum'):
        with tables.open_file(path, 'a') as data:
            group = data.create_group('/', group_name,
                                      'Transverse momentum spectrum')
            data.create_array(group, 'bin_edges', self.bin_edges,
                              'Bin edges (GeV)')
            data.create_array(group, 'counts', self.counts,
                              'Number of particles per bin')
            group._v_attrs.n_events = self.n_events
        logger.info('Stored transverse momentum spectrum in %s:/%s.', path,
                    group_name)

    def print_result_to(self, sink):
        sink.write(f'Events: {self.n_events}\n')
        sink.write('%10s %10s %12s %14s\n' % ('pt_low', 'pt_high', 'count',
                                              'dN/dpt/event'))
        for low, high, count, density in zip(self.bin_edges[:-1],
                                             self.bin_edges[1:],
                                             self.counts, self.density()):
            sink.write('%10.3f %10.3f %12d %14.5f\n' % (low, high, count,
                                                        density))

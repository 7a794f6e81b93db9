import os
import unittest

import tables
from mock import Mock, patch
from numpy.testing import assert_array_equal

from particlestream import store_particle_data as store
from particlestream.blocks import EndBlock
from particlestream.errors import (TruncatedStreamError, UnknownQuantityError,
                                   UsageError)

from .synthetic import EVENT_0, EVENT_1, create_stream, create_tempfile_path, truncate


class StoreParticleDataTests(unittest.TestCase):
    """Store particle data using the function directly"""

    def setUp(self):
        self.source_path = create_stream()
        self.addCleanup(os.remove, self.source_path)
        self.destination_path = create_tempfile_path('.h5')
        self.addCleanup(self.remove_if_exists, self.destination_path)

    def remove_if_exists(self, path):
        if os.path.exists(path):
            os.remove(path)

    def test_store_data(self):
        # First with overwrite false
        self.assertRaises(FileExistsError, store.store_particle_data,
                          self.source_path, self.destination_path,
                          ['px', 'pdg_id'])
        # Now with overwrite true
        store.store_particle_data(self.source_path, self.destination_path,
                                  ['px', 'pdg_id', 'mass'], overwrite=True)

        with tables.open_file(self.destination_path, 'r') as data:
            particles = data.root.particles.read()
            self.assertEqual(data.root.particles.colnames,
                             ['event_number', 'ensemble_number', 'px',
                              'pdg_id'])
            assert_array_equal(particles['px'],
                               [p['px'] for p in EVENT_0 + EVENT_1])
            assert_array_equal(particles['pdg_id'],
                               [p['pdg_id'] for p in EVENT_0 + EVENT_1])
            assert_array_equal(particles['event_number'], [0] * 3 + [1] * 5)

            events = data.root.events.read()
            assert_array_equal(events['npart'], [3, 5])
            assert_array_equal(events['impact_parameter'], [2.5, 7.0])

            attrs = data.root._v_attrs
            self.assertEqual(attrs.quantities, ['px', 'pdg_id'])
            self.assertEqual(attrs.missing_quantities, ['mass'])
            self.assertEqual(attrs.format_version, 1)

    def test_unknown_quantity(self):
        os.remove(self.destination_path)
        self.assertRaises(UnknownQuantityError, store.store_particle_data,
                          self.source_path, self.destination_path,
                          ['px', 'colour'])
        self.assertFalse(os.path.exists(self.destination_path))

    def test_truncated_source(self):
        truncate(self.source_path, 5)
        self.assertRaises(TruncatedStreamError, store.store_particle_data,
                          self.source_path, self.destination_path,
                          overwrite=True)
        self.assertFalse(os.path.exists(self.destination_path))

    @patch.object(store.tables, 'open_file')
    def test_open_failure(self, mock_open_file):
        mock_open_file.side_effect = RuntimeError('cannot create file')
        os.remove(self.destination_path)
        with self.assertRaises(RuntimeError) as cm:
            store.store_particle_data(self.source_path,
                                      self.destination_path)
        self.assertEqual(str(cm.exception), 'cannot create file')
        self.assertFalse(os.path.exists(self.destination_path))

    def test_end_block_without_particle_block(self):
        accessor = store.ParticleTableAccessor(Mock())
        self.assertRaises(UsageError, accessor.on_end_block, EndBlock(3, 1.))

    @patch.object(store, 'store_particle_data')
    def test_main(self, mock_store):
        store.main([self.source_path, self.destination_path, '-q', 'px',
                    'py', '--overwrite'])
        mock_store.assert_called_once_with(self.source_path,
                                           self.destination_path,
                                           ['px', 'py'], True, False)


if __name__ == '__main__':
    unittest.main()

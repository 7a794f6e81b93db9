import struct
import unittest

from particlestream import quantities
from particlestream.errors import MalformedStreamError
from particlestream.layout import RecordLayout
from particlestream.quantities import Quantity


class RecordLayoutTests(unittest.TestCase):

    def setUp(self):
        # px at 4, pdg_id at 0, 4 bytes of padding at the end
        self.layout = RecordLayout([(Quantity.px, 4), (Quantity.pdg_id, 0)],
                                   stride=16)

    def test_iteration_keeps_order(self):
        self.assertEqual(list(self.layout),
                         [(Quantity.px, 4), (Quantity.pdg_id, 0)])
        self.assertEqual(self.layout.names, ['px', 'pdg_id'])
        self.assertEqual(len(self.layout), 2)

    def test_contains_and_offset(self):
        self.assertIn(Quantity.px, self.layout)
        self.assertNotIn(Quantity.py, self.layout)
        self.assertEqual(self.layout.offset(Quantity.px), 4)
        self.assertIsNone(self.layout.offset(Quantity.py))

    def test_overlap(self):
        self.assertRaises(MalformedStreamError, RecordLayout,
                          [(Quantity.px, 0), (Quantity.py, 4)], 16)

    def test_beyond_stride(self):
        with self.assertRaises(MalformedStreamError) as cm:
            RecordLayout([(Quantity.px, 4)], 8)
        self.assertEqual(cm.exception.stage, 'file header')

    def test_negative_offset(self):
        self.assertRaises(MalformedStreamError, RecordLayout,
                          [(Quantity.pdg_id, -4)], 8)

    def test_bad_stride(self):
        self.assertRaises(MalformedStreamError, RecordLayout, [], 0)

    def test_duplicate(self):
        self.assertRaises(MalformedStreamError, RecordLayout,
                          [(Quantity.px, 0), (Quantity.px, 8)], 16)

    def test_restrict(self):
        requested = quantities.resolve(['pdg_id', 'pz', 'px'])
        restricted = self.layout.restrict(requested)
        self.assertEqual(list(restricted),
                         [(Quantity.pdg_id, 0), (Quantity.px, 4)])
        self.assertEqual(restricted.stride, 16)
        self.assertEqual(restricted.missing, ('pz',))

    def test_decode(self):
        record = struct.pack('<id4x', 2212, 1.25)
        self.assertEqual(self.layout.decode(record, Quantity.pdg_id), 2212)
        self.assertEqual(self.layout.decode(record, Quantity.px), 1.25)
        self.assertEqual(self.layout.decode_record(record),
                         {'px': 1.25, 'pdg_id': 2212})

    def test_decode_short_record(self):
        self.assertRaises(MalformedStreamError, self.layout.decode, b'\0' * 8,
                          Quantity.pdg_id)

    def test_dtype(self):
        dtype = self.layout.dtype
        self.assertEqual(dtype.itemsize, 16)
        self.assertEqual(dtype.names, ('px', 'pdg_id'))
        self.assertEqual(dtype.fields['px'][1], 4)
        self.assertEqual(dtype.fields['pdg_id'][1], 0)

    def test_equality(self):
        other = RecordLayout([(Quantity.px, 4), (Quantity.pdg_id, 0)], 16)
        self.assertEqual(self.layout, other)
        self.assertNotEqual(self.layout, RecordLayout([(Quantity.px, 4)], 16))


if __name__ == '__main__':
    unittest.main()

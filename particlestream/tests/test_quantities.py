import unittest

from particlestream import quantities
from particlestream.errors import UnknownQuantityError, ConfigurationError
from particlestream.quantities import Quantity, QuantityType


class QuantityCatalogTests(unittest.TestCase):

    def test_lookup(self):
        info = quantities.lookup('px')
        self.assertEqual(info.quantity, Quantity.px)
        self.assertIs(info.type, QuantityType.Double)

        info = quantities.lookup('pdg_id')
        self.assertEqual(info.quantity, Quantity.pdg_id)
        self.assertIs(info.type, QuantityType.Int32)

    def test_lookup_unknown(self):
        with self.assertRaises(UnknownQuantityError) as cm:
            quantities.lookup('spin_colour')
        self.assertEqual(cm.exception.name, 'spin_colour')
        self.assertIn('Unknown quantity', str(cm.exception))
        self.assertIsInstance(cm.exception, KeyError)
        self.assertIsInstance(cm.exception, ConfigurationError)

    def test_every_quantity_in_catalog(self):
        for quantity in Quantity:
            self.assertEqual(quantities.CATALOG[quantity.name].quantity,
                             quantity)

    def test_stable_tags(self):
        """The tags are written in files and may never change"""

        self.assertEqual(Quantity.t, 0)
        self.assertEqual(Quantity.px, 6)
        self.assertEqual(Quantity.pdg_id, 9)
        self.assertEqual(Quantity.strangeness, 21)

    def test_type_sizes(self):
        self.assertEqual(QuantityType.Double.size, 8)
        self.assertEqual(QuantityType.Int32.size, 4)
        self.assertEqual(QuantityType.Double.dtype, '<f8')
        self.assertEqual(QuantityType.Int32.dtype, '<i4')

    def test_info(self):
        self.assertIs(quantities.info(Quantity.charge).type,
                      QuantityType.Int32)
        self.assertIs(quantities.info(4).type, QuantityType.Double)

    def test_resolve(self):
        resolved = quantities.resolve(['pdg_id', 'px', 'pdg_id', 'x'])
        self.assertEqual([info.quantity.name for info in resolved],
                         ['pdg_id', 'px', 'x'])

    def test_resolve_unknown(self):
        self.assertRaises(UnknownQuantityError, quantities.resolve,
                          ['px', 'does_not_exist'])

    def test_default_quantities_known(self):
        quantities.resolve(quantities.DEFAULT_QUANTITIES)


if __name__ == '__main__':
    unittest.main()

"""Catalog of the per-particle quantities a stream can carry

Each quantity has a stable integer tag (the value written in the file
header) and a type that determines its width in a particle record.

Use it like this::

    >>> from particlestream import quantities
    >>> info = quantities.lookup('px')
    >>> info.quantity, info.type
    (<Quantity.px: 6>, <QuantityType.Double: 'd'>)

.. note::
    The tags are part of the binary format. New quantities may only be
    appended, existing tags are never changed or removed.

"""
import enum
import struct
from collections import namedtuple

from .errors import UnknownQuantityError


class QuantityType(enum.Enum):

    """Storage type of a quantity in a particle record

    The value is the :mod:`struct` format character.

    """

    Double = 'd'
    Int32 = 'i'

    @property
    def format(self):
        """Little-endian struct format of a single value"""
        return '<' + self.value

    @property
    def size(self):
        """Width in bytes"""
        return struct.calcsize(self.format)

    @property
    def dtype(self):
        """numpy type string"""
        return {'d': '<f8', 'i': '<i4'}[self.value]


class Quantity(enum.IntEnum):
    t = 0
    x = 1
    y = 2
    z = 3
    mass = 4
    p0 = 5
    px = 6
    py = 7
    pz = 8
    pdg_id = 9
    id = 10
    charge = 11
    ncoll = 12
    form_time = 13
    xsecfac = 14
    proc_id_origin = 15
    proc_type_origin = 16
    time_last_coll = 17
    pdg_mother1 = 18
    pdg_mother2 = 19
    baryon_number = 20
    strangeness = 21


QuantityInfo = namedtuple('QuantityInfo', ['quantity', 'type'])

_INTS = {Quantity.pdg_id, Quantity.id, Quantity.charge, Quantity.ncoll,
         Quantity.proc_id_origin, Quantity.proc_type_origin,
         Quantity.pdg_mother1, Quantity.pdg_mother2,
         Quantity.baryon_number, Quantity.strangeness}

#: Field name -> QuantityInfo, in tag order.
CATALOG = {q.name: QuantityInfo(q, QuantityType.Int32 if q in _INTS
                                else QuantityType.Double)
           for q in Quantity}


def lookup(name):
    """Get the QuantityInfo for a field name

    :param name: field name, e.g. 'px' or 'pdg_id'.
    :raises UnknownQuantityError: if the name is not in the catalog.

    """
    try:
        return CATALOG[name]
    except KeyError:
        raise UnknownQuantityError(name) from None


def info(quantity):
    """Get the QuantityInfo for a Quantity tag"""

    return CATALOG[Quantity(quantity).name]


def resolve(names):
    """Resolve a sequence of field names into QuantityInfo tuples

    Duplicates are dropped, the first occurrence determines the order.

    :raises UnknownQuantityError: for the first unknown name.

    """
    resolved = []
    for name in names:
        quantity_info = lookup(name)
        if quantity_info not in resolved:
            resolved.append(quantity_info)
    return resolved


#: Quantities decoded by the command line tools when none are given.
DEFAULT_QUANTITIES = ('t', 'x', 'y', 'z', 'mass', 'p0', 'px', 'py', 'pz',
                      'pdg_id', 'id', 'charge')

"""Per-file mapping from quantities to their place in a particle record

A :class:`RecordLayout` is built once from the file header and is not
modified afterwards. The reader shares the same instance with all
accessors for the duration of a read.

"""
import logging
import struct

import numpy

from . import quantities
from .errors import MalformedStreamError

logger = logging.getLogger('particlestream.layout')


class RecordLayout:

    """Offsets of quantities within a fixed-size particle record

    :param offsets: iterable of (Quantity, offset) pairs, in file order.
    :param stride: size of a single particle record in bytes.
    :param missing: names of requested quantities the file does not
                    carry, see :meth:`restrict`.
    :raises MalformedStreamError: if a field overlaps another field or
                                  does not fit inside the record.

    """

    def __init__(self, offsets, stride, missing=()):
        self.stride = stride
        self.missing = tuple(missing)
        self._offsets = {}
        self._dtype = None
        for quantity, offset in offsets:
            quantity = quantities.Quantity(quantity)
            if quantity in self._offsets:
                raise MalformedStreamError(
                    f"Quantity '{quantity.name}' appears twice in the layout",
                    stage='file header')
            self._offsets[quantity] = offset
        self._validate()

    def _validate(self):
        if self.stride <= 0:
            raise MalformedStreamError(
                f'Record stride must be positive, got {self.stride}',
                stage='file header')
        end = 0
        previous = None
        for quantity, offset in sorted(self._offsets.items(),
                                       key=lambda item: item[1]):
            width = quantities.info(quantity).type.size
            if offset < 0:
                raise MalformedStreamError(
                    f"Quantity '{quantity.name}' has negative offset {offset}",
                    stage='file header')
            if offset < end:
                raise MalformedStreamError(
                    f"Quantity '{quantity.name}' at offset {offset} overlaps "
                    f"'{previous.name}'", stage='file header')
            if offset + width > self.stride:
                raise MalformedStreamError(
                    f"Quantity '{quantity.name}' at offset {offset} does not "
                    f"fit in a record of {self.stride} bytes",
                    stage='file header')
            end = offset + width
            previous = quantity

    def __contains__(self, quantity):
        return quantity in self._offsets

    def __iter__(self):
        """Iterate over (Quantity, offset) pairs in layout order"""
        return iter(self._offsets.items())

    def __len__(self):
        return len(self._offsets)

    def __eq__(self, other):
        if not isinstance(other, RecordLayout):
            return NotImplemented
        return (list(self) == list(other) and self.stride == other.stride)

    def __repr__(self):
        fields = ', '.join(f'{q.name}@{o}' for q, o in self)
        return f'RecordLayout([{fields}], stride={self.stride})'

    @property
    def names(self):
        """Field names in layout order"""
        return [quantity.name for quantity in self._offsets]

    def offset(self, quantity):
        """Byte offset of a quantity, or None if it is not in the layout"""
        return self._offsets.get(quantity)

    def restrict(self, requested):
        """Get the layout for a subset of the quantities

        The resulting layout keeps the file's offsets and stride, but only
        contains the requested quantities the file carries, in the
        requested order. Requested quantities that are absent are listed
        in :attr:`missing` of the result; they are skipped when decoding.

        :param requested: sequence of QuantityInfo (see
                          :func:`~particlestream.quantities.resolve`).

        """
        present = []
        missing = []
        for quantity_info in requested:
            quantity = quantity_info.quantity
            if quantity in self._offsets:
                present.append((quantity, self._offsets[quantity]))
            else:
                missing.append(quantity.name)
        if missing:
            logger.debug('Quantities not present in stream: %s',
                         ', '.join(missing))
        return RecordLayout(present, self.stride, missing)

    def decode(self, record, quantity):
        """Read a single value from one particle record

        :param record: bytes-like object of at least :attr:`stride` bytes.
        :param quantity: the Quantity to decode.
        :return: float or int, depending on the quantity type.

        """
        offset = self._offsets[quantity]
        quantity_type = quantities.info(quantity).type
        if len(record) < self.stride:
            raise MalformedStreamError(
                f'Particle record of {len(record)} bytes is shorter than '
                f'the stride of {self.stride} bytes', stage='particle record')
        return struct.unpack_from(quantity_type.format, record, offset)[0]

    def decode_record(self, record):
        """Decode all quantities of one particle record into a dict"""

        return {quantity.name: self.decode(record, quantity)
                for quantity in self._offsets}

    @property
    def dtype(self):
        """numpy structured dtype describing a complete particle record"""

        if self._dtype is None:
            self._dtype = self._build_dtype()
        return self._dtype

    def _build_dtype(self):
        names = []
        formats = []
        offsets = []
        for quantity, offset in self._offsets.items():
            names.append(quantity.name)
            formats.append(quantities.info(quantity).type.dtype)
            offsets.append(offset)
        return numpy.dtype({'names': names, 'formats': formats,
                            'offsets': offsets, 'itemsize': self.stride})

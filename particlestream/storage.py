""" PyTables table descriptions for data storage

    This module contains the table descriptions used to store particle
    streams and analysis results in HDF5 files.

"""
import tables

from .quantities import QuantityType, info


class EventSummary(tables.IsDescription):

    """Store a summary of one event

    .. attribute:: event_number, ensemble_number

        identify the event within the stream. An event number can occur
        once for each ensemble.

    .. attribute:: npart

        number of particles in the event

    .. attribute:: impact_parameter

        impact parameter from the end block of the event

    """
    event_number = tables.Int32Col(pos=0)
    ensemble_number = tables.Int32Col(pos=1)
    npart = tables.Int32Col(pos=2)
    impact_parameter = tables.Float64Col(pos=3)


class ParticleYield(tables.IsDescription):

    """Store the number of particles of one species"""

    pdg_id = tables.Int32Col(pos=0)
    count = tables.UInt64Col(pos=1)


def particle_description(layout):
    """Get a table description for the particles of a stream

    The first two columns identify the event, the others follow the
    quantities of the layout.

    :param layout: :class:`~particlestream.layout.RecordLayout` of the
                   decoded quantities.
    :return: dictionary usable as table description.

    """
    description = {'event_number': tables.Int32Col(pos=0),
                   'ensemble_number': tables.Int32Col(pos=1)}
    for pos, (quantity, _) in enumerate(layout, 2):
        if info(quantity).type is QuantityType.Double:
            description[quantity.name] = tables.Float64Col(pos=pos)
        else:
            description[quantity.name] = tables.Int32Col(pos=pos)
    return description

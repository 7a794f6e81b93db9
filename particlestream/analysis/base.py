"""Base class for analyses

An analysis is an :class:`~particlestream.accessors.Accessor` which
accumulates a result over a complete stream. After the stream is read
the result can be stored with :meth:`Analysis.save` and shown with
:meth:`Analysis.print_result_to`. Calling either earlier is allowed, the
result is then based on the blocks seen so far.

To make an analysis available by name, register it in the
:class:`~particlestream.analysis.registry.AnalysisRegistry`.

"""
import io

from ..accessors import Accessor


class Analysis(Accessor):

    """Base class for analyses

    Subclasses set :attr:`name` and implement the callbacks,
    :meth:`save` and :meth:`print_result_to`.

    """

    #: Name under which the analysis is registered.
    name = None

    #: Quantities the analysis decodes, used as default by the CLI.
    quantities = ()

    def save(self, path):
        """Store the result in a file

        :param path: path of the (HDF5) output file.

        """
        raise NotImplementedError

    def print_result_to(self, sink):
        """Write a human readable summary of the result

        :param sink: a text file-like object.

        """
        raise NotImplementedError

    def result_text(self):
        """Get the summary as a string"""

        output = io.StringIO()
        self.print_result_to(output)
        return output.getvalue()

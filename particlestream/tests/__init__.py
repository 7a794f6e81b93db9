"""Tests for the particle stream reader, accessors and analyses

The tests write small synthetic streams (see :mod:`.synthetic`) to
temporary files, read them back and compare the decoded particles with
the values that were written. After installing particlestream they can
be run with::

    >>> import particlestream
    >>> particlestream.run_tests()

"""
import os
from unittest import TextTestRunner, defaultTestLoader


def run_tests(verbosity=1):
    """Discover and run the particlestream test modules

    :param verbosity: verbosity of the text runner.
    :return: the `unittest.TextTestResult` of the run.

    """
    suite = defaultTestLoader.discover(
        start_dir=os.path.dirname(__file__),
        top_level_dir=os.path.dirname(os.path.dirname(os.path.dirname(
            os.path.abspath(__file__)))))
    return TextTestRunner(verbosity=verbosity).run(suite)

""" Run analyses on a particle stream

    Resolve analyses by name, read the stream once and optionally store
    and print the results::

        from particlestream.analysis.run import run_analysis

        summary = run_analysis('particles_binary.bin', 'yields', ['pdg_id'],
                               save_path='yields.h5')

    The same is available from the command line, see::

        $ run_particle_analysis --help

    For example to print the multiplicities and particle yields of a
    stream with a progress bar::

        $ run_particle_analysis --progress particles_binary.bin \\
              multiplicity yields

"""
import argparse
import io
import logging
import sys

from ..accessors import DispatchingAccessor
from ..errors import UnknownAnalysisError
from ..quantities import DEFAULT_QUANTITIES
from ..reader import BinaryReader
from .registry import AnalysisRegistry

logger = logging.getLogger('particlestream.analysis.run')


def create_analyses(analysis_names, registry=None):
    """Create a new analysis for each name

    :raises UnknownAnalysisError: for the first unknown name.

    """
    if registry is None:
        registry = AnalysisRegistry.instance()
    analyses = []
    for name in analysis_names:
        analysis = registry.create(name)
        if analysis is None:
            raise UnknownAnalysisError(name)
        analyses.append(analysis)
    return analyses


def run_analyses(filepath, analysis_names, quantities, save_path=None,
                 print_output=True, progress=False):
    """Run several analyses in a single pass over a stream

    :param filepath: path of the binary stream.
    :param analysis_names: names of registered analyses.
    :param quantities: names of the quantities to decode.
    :param save_path: if given, every analysis saves its result to this
                      path.
    :param print_output: if True, render the summaries.
    :param progress: show a progressbar while reading.
    :return: list of (name, summary) pairs in the given order. Summaries
             are empty strings if print_output is False.

    """
    analyses = create_analyses(analysis_names)
    dispatcher = DispatchingAccessor(analyses)
    reader = BinaryReader(filepath, quantities, dispatcher, progress=progress)
    logger.info('Running %s on %s.', ', '.join(analysis_names), filepath)
    reader.read()

    if save_path is not None:
        for analysis in analyses:
            analysis.save(save_path)

    results = []
    for name, analysis in zip(analysis_names, analyses):
        output = io.StringIO()
        if print_output:
            analysis.print_result_to(output)
        results.append((name, output.getvalue()))
    return results


def run_analysis(filepath, analysis_name, quantities, save_path=None,
                 print_output=True, progress=False):
    """Run a single analysis on a stream

    :raises UnknownAnalysisError: if the analysis is not registered. The
                                  file is not opened in that case.
    :return: the summary, or an empty string if print_output is False.

    """
    [(_, output)] = run_analyses(filepath, [analysis_name], quantities,
                                 save_path=save_path,
                                 print_output=print_output,
                                 progress=progress)
    return output


def default_quantities(analysis_names, registry=None):
    """Quantities needed by the analyses, DEFAULT_QUANTITIES if none"""

    if registry is None:
        registry = AnalysisRegistry.instance()
    quantities = []
    for name in analysis_names:
        factory = registry.get_factory(name)
        for quantity in getattr(factory, 'quantities', ()):
            if quantity not in quantities:
                quantities.append(quantity)
    return quantities or list(DEFAULT_QUANTITIES)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Run analyses on a binary particle stream.')
    parser.add_argument('source', nargs='?',
                        help="path of the binary particle stream")
    parser.add_argument('analyses', nargs='*',
                        help="names of the analyses to run")
    parser.add_argument('-q', '--quantities', nargs='+',
                        help='quantities to decode, by default those '
                             'needed by the analyses')
    parser.add_argument('--save', metavar='PATH',
                        help='store the results in this HDF5 file')
    parser.add_argument('--no-print', dest='print_output',
                        action='store_false',
                        help='do not print the results')
    parser.add_argument('--progress', action='store_true',
                        help='show progressbar while reading')
    parser.add_argument('--log', metavar='FILE',
                        help='write logs to this file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log debug messages')
    parser.add_argument('--list', action='store_true',
                        help='list the available analyses and exit')
    args = parser.parse_args(argv)

    if args.log or args.verbose:
        logging.basicConfig(filename=args.log, filemode='a',
                            format='%(asctime)s %(name)s %(levelname)s: '
                                   '%(message)s',
                            datefmt='%y%m%d_%H%M%S',
                            level=logging.DEBUG if args.verbose
                            else logging.INFO)

    if args.list:
        for name in AnalysisRegistry.instance().names():
            print(name)
        return 0
    if args.source is None or not args.analyses:
        parser.error('a source and at least one analysis are required')

    quantities = args.quantities
    if quantities is None:
        quantities = default_quantities(args.analyses)

    results = run_analyses(args.source, args.analyses, quantities,
                           save_path=args.save,
                           print_output=args.print_output,
                           progress=args.progress)
    if args.print_output:
        for name, output in results:
            print(f'== {name}')
            print(output, end='')
    return 0


if __name__ == '__main__':
    sys.exit(main())

import io
import os
import unittest

import tables
from mock import patch

from particlestream.analysis import run
from particlestream.analysis.base import Analysis
from particlestream.analysis.multiplicity import MultiplicityAnalysis
from particlestream.analysis.registry import AnalysisRegistry
from particlestream.errors import UnknownAnalysisError

from ..synthetic import QUANTITIES, create_stream, create_tempfile_path


class CountingAnalysis(Analysis):

    name = 'counting'
    quantities = ('pz', 'px')

    def __init__(self):
        super().__init__()
        self.n_blocks = 0
        self.saved = None

    def on_particle_block(self, block):
        self.n_blocks += 1

    def save(self, path):
        self.saved = path

    def print_result_to(self, sink):
        sink.write(f'{self.n_blocks} blocks\n')


class RunAnalysisTests(unittest.TestCase):

    def setUp(self):
        self.path = create_stream()
        self.addCleanup(os.remove, self.path)
        self.registry = AnalysisRegistry()
        self.registry.register('counting', CountingAnalysis)
        self.registry.register('multiplicity', MultiplicityAnalysis)
        patcher = patch.object(AnalysisRegistry, '_instance', self.registry)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_run_analysis(self):
        output = run.run_analysis(self.path, 'counting', ['px'])
        self.assertEqual(output, '2 blocks\n')

    def test_without_print(self):
        output = run.run_analysis(self.path, 'counting', ['px'],
                                  print_output=False)
        self.assertEqual(output, '')

    def test_unknown_analysis(self):
        missing_path = self.path + '.does_not_exist'
        with patch.object(run, 'BinaryReader') as mock_reader:
            with self.assertRaises(UnknownAnalysisError) as cm:
                run.run_analysis(missing_path, 'does-not-exist', ['px'])
        self.assertIn("Unknown analysis 'does-not-exist'", str(cm.exception))
        mock_reader.assert_not_called()

    def test_save(self):
        output_path = create_tempfile_path('.h5')
        os.remove(output_path)
        self.addCleanup(os.remove, output_path)
        run.run_analysis(self.path, 'multiplicity', QUANTITIES,
                         save_path=output_path)
        with tables.open_file(output_path, 'r') as data:
            self.assertEqual(data.root.events.nrows, 2)

    def test_run_analyses(self):
        results = run.run_analyses(self.path, ['multiplicity', 'counting'],
                                   ['px'])
        self.assertEqual([name for name, _ in results],
                         ['multiplicity', 'counting'])
        self.assertIn('Events: 2', results[0][1])
        self.assertEqual(results[1][1], '2 blocks\n')

    def test_default_quantities(self):
        self.assertEqual(run.default_quantities(['counting']), ['pz', 'px'])
        self.assertEqual(run.default_quantities(['multiplicity']),
                         list(run.DEFAULT_QUANTITIES))


class MainTests(unittest.TestCase):

    def setUp(self):
        self.path = create_stream()
        self.addCleanup(os.remove, self.path)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_main(self, mock_stdout):
        self.assertEqual(run.main([self.path, 'multiplicity', 'yields']), 0)
        output = mock_stdout.getvalue()
        self.assertIn('== multiplicity\n', output)
        self.assertIn('== yields\n', output)
        self.assertIn('pi_p', output)

    @patch('sys.stdout', new_callable=io.StringIO)
    def test_list(self, mock_stdout):
        self.assertEqual(run.main(['--list']), 0)
        self.assertEqual(mock_stdout.getvalue().split(),
                         ['multiplicity', 'pt_spectrum', 'yields'])

    @patch.object(run, 'run_analyses')
    def test_arguments(self, mock_run):
        mock_run.return_value = []
        run.main([self.path, 'yields', '-q', 'pdg_id', 'px', '--no-print',
                  '--save', 'out.h5'])
        mock_run.assert_called_once_with(self.path, ['yields'],
                                         ['pdg_id', 'px'], save_path='out.h5',
                                         print_output=False, progress=False)

    @patch('sys.stderr', new_callable=io.StringIO)
    def test_missing_analysis(self, mock_stderr):
        with self.assertRaises(SystemExit):
            run.main([self.path])


if __name__ == '__main__':
    unittest.main()

import os
import unittest

from mock import patch, sentinel

from particlestream import tests


class RunTestsTests(unittest.TestCase):

    @patch.object(tests, 'TextTestRunner')
    @patch.object(tests, 'defaultTestLoader')
    def test_run_tests(self, mock_loader, mock_runner):
        mock_loader.discover.return_value = sentinel.suite
        mock_runner.return_value.run.return_value = sentinel.result

        self.assertIs(tests.run_tests(verbosity=2), sentinel.result)

        kwargs = mock_loader.discover.call_args[1]
        self.assertEqual(os.path.abspath(kwargs['start_dir']),
                         os.path.dirname(os.path.abspath(tests.__file__)))
        self.assertTrue(os.path.isdir(os.path.join(kwargs['top_level_dir'],
                                                   'particlestream')))
        mock_runner.assert_called_once_with(verbosity=2)
        mock_runner.return_value.run.assert_called_once_with(sentinel.suite)


if __name__ == '__main__':
    unittest.main()

import os
import shutil
import sys
import tempfile
import textwrap
import unittest
from unittest.mock import patch
from click.testing import CliRunner
from elfactory import config, resolver
from elfactory.cli_logger import logger
from elfactory.main import cli

FACTORY_MODULE = textwrap.dedent("""
    from elfactory import ExpressionFactory


    class CliFactory(ExpressionFactory):
        def __init__(self, properties=None):
            self.properties = properties

        def coerce_to_type(self, obj, expected_type):
            return obj

        def create_value_expression(self, *args):
            return None

        def create_method_expression(self, context, expression, expected_return_type, expected_param_types):
            return None


    class ExplodingFactory(CliFactory):
        def __init__(self):
            raise RuntimeError("cannot start")
""")

class TestMain(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.test_dir = tempfile.mkdtemp()
        lib_dir = os.path.join(self.test_dir, "lib")
        os.makedirs(lib_dir)
        with open(os.path.join(lib_dir, "cli_factories.py"), "w") as f:
            f.write(FACTORY_MODULE)

        patchers = [
            patch.object(sys, "path", list(sys.path)),
            patch.dict(sys.modules),
            patch.dict(os.environ, {resolver.PLATFORM_ROOT_ENV: os.path.join(self.test_dir, "platform")}),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)
        os.environ.pop(resolver.PROPERTY_NAME, None)
        sys.modules.pop("cli_factories", None)

    def tearDown(self):
        logger.verbose = False
        logger.log_to_file = False
        shutil.rmtree(self.test_dir)

    def _save(self, system=None, properties=None):
        conf = {"loader": {"search_path": ["lib"]}}
        if system:
            conf["system"] = system
        if properties:
            conf["properties"] = properties
        config.save_config(conf, path=self.test_dir)

    def test_resolve_default(self):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "resolve"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(f"{resolver.DEFAULT_CLASS_NAME} (default)", result.output)

    def test_resolve_from_system_table(self):
        self._save(system={resolver.PROPERTY_NAME: "cli_factories.CliFactory"})
        result = self.runner.invoke(cli, ["--path", self.test_dir, "resolve"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("cli_factories.CliFactory (process-property)", result.output)

    def test_resolve_from_services_resource(self):
        self._save(system={resolver.PROPERTY_NAME: "cli_factories.ExplodingFactory"})
        resource = os.path.join(self.test_dir, "lib", "META-INF", "services", resolver.PROPERTY_NAME)
        os.makedirs(os.path.dirname(resource))
        with open(resource, "w") as f:
            f.write("cli_factories:CliFactory\n")
        result = self.runner.invoke(cli, ["--path", self.test_dir, "resolve"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("cli_factories:CliFactory (service-resource)", result.output)

    def test_sources(self):
        self._save(system={resolver.PROPERTY_NAME: "cli_factories.CliFactory"})
        result = self.runner.invoke(cli, ["--path", self.test_dir, "sources"])
        self.assertEqual(result.exit_code, 0)
        lines = result.output.strip().splitlines()
        self.assertIn("platform-properties: -", lines)
        self.assertIn("process-property: cli_factories.CliFactory", lines)
        self.assertIn(f"default: {resolver.DEFAULT_CLASS_NAME}", lines)

    def test_create(self):
        self._save(system={resolver.PROPERTY_NAME: "cli_factories.CliFactory"}, properties={"cache": "on"})
        result = self.runner.invoke(cli, ["--path", self.test_dir, "create"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("cli_factories.CliFactory", result.output)

    def test_create_missing_default(self):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "create"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn(f"Unable to find ExpressionFactory of type: {resolver.DEFAULT_CLASS_NAME}", result.output)

    def test_create_construction_error(self):
        self._save(system={resolver.PROPERTY_NAME: "cli_factories.ExplodingFactory"})
        result = self.runner.invoke(cli, ["--path", self.test_dir, "create", "--no-properties"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unable to create ExpressionFactory of type: cli_factories.ExplodingFactory", result.output)
        self.assertIn("cannot start", result.output)

    def test_verbose_shows_discovery(self):
        result = self.runner.invoke(cli, ["--path", self.test_dir, "--verbose", "resolve"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("No ExpressionFactory class from service-resource", result.output)
        self.assertTrue(logger.verbose)

    def test_config_view_not_found(self):
        """Test that viewing a non-existent config returns an error."""
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "view"])
        self.assertIn("Error: No elfactory.toml found.", result.output)

    def test_config_view(self):
        """Test that viewing a config prints its content."""
        self._save(properties={"cache": "on"})
        result = self.runner.invoke(cli, ["--path", self.test_dir, "config", "view"])
        with open(os.path.join(self.test_dir, config.CONFIG_FILE), "r") as f:
            self.assertEqual(result.output.strip(), f.read().strip())

    def test_log_list(self):
        log_dir = os.path.join(self.test_dir, "logs")
        os.makedirs(log_dir)
        with open(os.path.join(log_dir, "elfactory_20260101_000000.log"), "w") as f:
            f.write("[00:00:00] [INFO] hello\n")
        with patch("elfactory.cli_logger.LOG_DIR", log_dir):
            listed = self.runner.invoke(cli, ["log", "--list"])
            shown = self.runner.invoke(cli, ["log", "--filename", "elfactory_20260101_000000.log"])
        self.assertIn("elfactory_20260101_000000.log", listed.output)
        self.assertIn("[INFO] hello", shown.output)

    @patch("importlib.metadata.version", return_value="9.9.9")
    def test_version(self, mock_version):
        result = self.runner.invoke(cli, ["version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("elfactory version 9.9.9", result.output)
        mock_version.assert_called_once_with("elfactory")

if __name__ == "__main__":
    unittest.main()

import io, os, tempfile, unittest
from pathlib import Path
from unittest import mock

from minijs import cmdline

EXAMPLES = Path(__file__).parent.parent / "examples"

class CommandLineTests(unittest.TestCase):
	def setUp(self) -> None:
		self.folder = tempfile.TemporaryDirectory()
		self.addCleanup(self.folder.cleanup)

	def write(self, text) -> str:
		path = os.path.join(self.folder.name, "program.js")
		with open(path, "w", encoding="utf-8") as fh:
			fh.write(text)
		return path

	def run_with(self, *argv):
		out, err = io.StringIO(), io.StringIO()
		with mock.patch("sys.stdout", out), mock.patch("sys.stderr", err):
			status = cmdline.run(cmdline.parser.parse_args(list(argv)))
		return status, out.getvalue(), err.getvalue()

	def test_clean_program(self):
		status, out, err = self.run_with(self.write("const x = 1;"))
		self.assertEqual(0, status)
		self.assertEqual("", out)
		self.assertEqual("", err)

	def test_types(self):
		status, out, err = self.run_with("-t", self.write("const id = (x) => x; const n = id(3) > 2;"))
		self.assertEqual(0, status)
		self.assertEqual("id : (t0) -> t0\nn : Bool\nprogram : Bool\n", out)

	def test_type_error(self):
		status, out, err = self.run_with(self.write('const x = 1 + "a";'))
		self.assertEqual(1, status)
		self.assertEqual("", out)
		self.assertIn("Found 1 issue:", err)
		self.assertIn("Cannot concatenate string with non-string value at position 12", err)

	def test_name_error_stops_inference(self):
		status, out, err = self.run_with(self.write('const x = y + "a";'))
		self.assertEqual(1, status)
		self.assertIn("'y' is used before it is declared", err)
		self.assertNotIn("concatenate", err)

	def test_parse_error(self):
		status, out, err = self.run_with(self.write("const = 1;"))
		self.assertEqual(1, status)
		self.assertIn("Unexpected '=' at position 6", err)

	def test_max_issues(self):
		status, out, err = self.run_with("--max-issues", "1", self.write('const a = [1, "x", true];'))
		self.assertEqual(1, status)
		self.assertIn("Giving up after 1 issues.", err)

	def test_verbose(self):
		status, out, err = self.run_with("-v", self.write("const x = 1;"))
		self.assertEqual(0, status)
		self.assertIn("x : Number", err)
		self.assertIn("Looks plausible to me.", err)

	def test_missing_file(self):
		status, out, err = self.run_with(os.path.join(self.folder.name, "nowhere.js"))
		self.assertEqual(1, status)
		self.assertIn("Cannot read", err)

	def test_shipped_examples(self):
		self.assertEqual(0, self.run_with(str(EXAMPLES / "polymorphism.js"))[0])
		self.assertEqual(0, self.run_with(str(EXAMPLES / "arrays.js"))[0])
		status, out, err = self.run_with(str(EXAMPLES / "mistakes.js"))
		self.assertEqual(1, status)
		self.assertIn("Found 4 issues:", err)

if __name__ == '__main__':
	unittest.main()

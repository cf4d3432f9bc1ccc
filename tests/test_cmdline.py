import io, json, tempfile
from pathlib import Path
import unittest
from unittest import mock

from matchable import Pure, Wrapped, zip_match
from matchable.documents import from_json, to_json
from matchable.diagnostics import Report, TooManyIssues
from matchable import cmdline

class DocumentTests(unittest.TestCase):
	def test_from_json(self):
		self.assertEqual(Wrapped({"a": Pure(1), "b": Wrapped([Pure(None)])}), from_json({"a": 1, "b": [None]}))
	
	def test_round_trip_of_a_zipped_document(self):
		zipped = zip_match(from_json({"a": [1, 2]}), from_json({"a": [3, 4]}))
		self.assertEqual({"a": [[1, 3], [2, 4]]}, to_json(zipped))
	
	def test_leaf_values_do_not_matter(self):
		self.assertIsNotNone(zip_match(from_json({"a": 1}), from_json({"a": "one"})))
	
	def test_empty_object_is_not_empty_array(self):
		self.assertIsNone(zip_match(from_json({}), from_json([])))
	
	def test_scalar_is_not_a_container(self):
		self.assertIsNone(zip_match(from_json([1]), from_json([[1]])))

class ReportTests(unittest.TestCase):
	def test_too_many_issues(self):
		report = Report(max_issues=2)
		report.no_such_file(Path("a"))
		with self.assertRaises(TooManyIssues):
			report.no_such_file(Path("b"))
	
	@mock.patch("sys.stderr", new_callable=io.StringIO)
	def test_assert_no_issues(self, stderr):
		report = Report()
		report.assert_no_issues("fine")
		report.mismatch(Path("a"), Path("b"), "why")
		with self.assertRaises(AssertionError):
			report.assert_no_issues("not fine")
		self.assertIn("does not have the same shape", stderr.getvalue())

class CommandLineTests(unittest.TestCase):
	def setUp(self) -> None:
		self._folder = tempfile.TemporaryDirectory()
		self.folder = Path(self._folder.name)
	
	def tearDown(self) -> None:
		self._folder.cleanup()
	
	def write(self, name, document) -> str:
		path = self.folder / name
		path.write_text(json.dumps(document), encoding="utf-8")
		return str(path)
	
	def run_with(self, *argv):
		with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
			with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr:
				status = cmdline.run(cmdline.parser.parse_args(argv))
		return status, stdout.getvalue(), stderr.getvalue()
	
	def test_matching_documents(self):
		ref = self.write("ref.json", {"a": [1, 2], "b": {"c": True}})
		other = self.write("other.json", {"b": {"c": False}, "a": [3, 4]})
		status, _, _ = self.run_with(ref, other)
		self.assertEqual(0, status)
	
	def test_mismatch_is_reported(self):
		ref = self.write("ref.json", {"a": [1, 2]})
		other = self.write("other.json", {"a": [1]})
		status, _, err = self.run_with("-v", ref, other)
		self.assertEqual(1, status)
		self.assertIn("lengths differ", err)
	
	def test_equal_flag(self):
		ref = self.write("ref.json", {"a": [1, 2]})
		same = self.write("same.json", {"a": [1, 2]})
		other = self.write("other.json", {"a": [1, 3]})
		self.assertEqual(0, self.run_with("-e", ref, same)[0])
		status, _, err = self.run_with("-e", "-v", ref, other)
		self.assertEqual(1, status)
		self.assertIn("different contents", err)
		self.assertEqual(0, self.run_with(ref, other)[0])
	
	def test_zip_flag(self):
		ref = self.write("ref.json", {"a": [1, 2]})
		other = self.write("other.json", {"a": ["x", "y"]})
		status, out, _ = self.run_with("-z", ref, other)
		self.assertEqual(0, status)
		self.assertEqual({"a": [[1, "x"], [2, "y"]]}, json.loads(out))
	
	def test_missing_file(self):
		ref = self.write("ref.json", [])
		status, _, err = self.run_with(ref, str(self.folder / "nope.json"))
		self.assertEqual(1, status)
		self.assertIn("no file", err)
	
	def test_broken_file(self):
		ref = self.folder / "ref.json"
		ref.write_text('{"a": [1, 2', encoding="utf-8")
		status, _, err = self.run_with(str(ref), str(ref))
		self.assertEqual(1, status)
		self.assertIn("pear-shaped", err)
	
	def test_file_that_is_not_utf8(self):
		ref = self.write("ref.json", [])
		latin = self.folder / "latin.json"
		latin.write_bytes(b'["caf\xe9"]')
		status, _, err = self.run_with(ref, str(latin))
		self.assertEqual(1, status)
		self.assertIn("could not read", err)
		self.assertIn("UTF-8", err)
	
	def test_directory_instead_of_a_file(self):
		ref = self.write("ref.json", [])
		status, _, err = self.run_with(ref, str(self.folder))
		self.assertEqual(1, status)
		self.assertIn("could not read", err)
	
	def test_booleans_are_not_numbers(self):
		ref = self.write("ref.json", {"k": True})
		other = self.write("other.json", {"k": 1})
		self.assertEqual(0, self.run_with(ref, other)[0])
		status, _, err = self.run_with("-e", ref, other)
		self.assertEqual(1, status)
		self.assertIn("different contents", err)
		self.assertEqual(0, self.run_with("-e", ref, ref)[0])

if __name__ == '__main__':
	unittest.main()

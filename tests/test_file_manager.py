"""
Unit tests for the FileManager utility class.
"""

import os
import shutil
import tempfile
import unittest

from mail_merge.utils.file_manager import FileManager


class TestFileManager(unittest.TestCase):
    """Test cases for FileManager class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_file = os.path.join(self.temp_dir, "test.txt")
        with open(self.test_file, 'w') as f:
            f.write("test content")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_init_with_keep_temp_false(self):
        """Test FileManager initialization with keep_temp=False."""
        fm = FileManager(keep_temp=False)
        self.assertFalse(fm.keep_temp)
        self.assertEqual(len(fm.temp_files), 0)

    def test_init_with_keep_temp_true(self):
        """Test FileManager initialization with keep_temp=True."""
        fm = FileManager(keep_temp=True)
        self.assertTrue(fm.keep_temp)
        self.assertEqual(len(fm.temp_files), 0)

    def test_create_temp_filename(self):
        """Test temporary filename creation."""
        fm = FileManager()
        temp_filename = fm.create_temp_filename("letter.dotx", "converted")

        self.assertIn("letter_converted_", temp_filename)
        self.assertTrue(temp_filename.endswith(".dotx"))
        self.assertEqual(fm.temp_files, [])

    def test_create_temp_filename_with_different_extension(self):
        """Test temporary filename creation with different extension."""
        fm = FileManager()
        temp_filename = fm.create_temp_filename("letter.dotx", "converted", ".docx")

        self.assertIn("letter_converted_", temp_filename)
        self.assertTrue(temp_filename.endswith(".docx"))

    def test_generate_temp_path_registers(self):
        """Test that generated paths are tracked for cleanup."""
        fm = FileManager()
        path = fm.generate_temp_path(os.path.join(self.temp_dir, "letter.dotx"), "converted", ".docx")

        self.assertIn(path, fm.temp_files)
        self.assertEqual(os.path.dirname(path), self.temp_dir)

    def test_register_temp_file(self):
        """Test temporary file registration."""
        fm = FileManager()
        fm.register_temp_file(self.test_file)
        fm.register_temp_file(self.test_file)

        self.assertEqual(fm.temp_files, [self.test_file])

    def test_write_and_read_bytes(self):
        """Test that written bytes land at the target and no partial file remains."""
        fm = FileManager()
        target = os.path.join(self.temp_dir, "out.docx")

        fm.write_bytes(target, b"PK\x03\x04data")

        self.assertEqual(fm.read_bytes(target), b"PK\x03\x04data")
        leftovers = [name for name in os.listdir(self.temp_dir) if "partial" in name]
        self.assertEqual(leftovers, [])

    def test_write_bytes_overwrites(self):
        """Test that an existing output is replaced."""
        fm = FileManager()
        fm.write_bytes(self.test_file, b"new")
        self.assertEqual(fm.read_bytes(self.test_file), b"new")

    def test_cleanup_with_keep_temp_false(self):
        """Test cleanup when keep_temp is False."""
        fm = FileManager(keep_temp=False)
        fm.register_temp_file(self.test_file)

        fm.cleanup()

        self.assertFalse(os.path.exists(self.test_file))
        self.assertEqual(len(fm.temp_files), 0)

    def test_cleanup_with_keep_temp_true(self):
        """Test cleanup when keep_temp is True."""
        fm = FileManager(keep_temp=True)
        fm.register_temp_file(self.test_file)

        fm.cleanup()

        self.assertTrue(os.path.exists(self.test_file))
        self.assertEqual(len(fm.temp_files), 0)

    def test_cleanup_nonexistent_file(self):
        """Test cleanup handles nonexistent files gracefully."""
        fm = FileManager(keep_temp=False)
        fm.register_temp_file(os.path.join(self.temp_dir, "nonexistent.txt"))

        fm.cleanup()
        self.assertEqual(len(fm.temp_files), 0)

    def test_context_manager_cleanup(self):
        """Test FileManager as context manager with keep_temp=False."""
        with FileManager(keep_temp=False) as fm:
            fm.register_temp_file(self.test_file)
            self.assertTrue(os.path.exists(self.test_file))

        self.assertFalse(os.path.exists(self.test_file))


if __name__ == '__main__':
    unittest.main()

import contextlib
import io
import os
import tempfile
import unittest
from unittest import mock

import bmp_parser
import negate_bmp
from bmp_errors import UnsupportedFormatError
from bmp_parser import Pixel
from tests.testing import BMPTestCase


class TestNegateBMP(BMPTestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = self.tmp.name
        self.input = self.write_file("in.bmp", self.sample())

    def tearDown(self):
        self.tmp.cleanup()

    def write_file(self, name, data):
        path = os.path.join(self.dir, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def run_main(self, argv, stdin=None):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            if stdin is None:
                code = negate_bmp.main(argv)
            else:
                with mock.patch("builtins.input", side_effect=stdin):
                    code = negate_bmp.main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_convert(self):
        output = os.path.join(self.dir, "out.bmp")
        negate_bmp.convert(self.input, output)
        result = bmp_parser.load(output)
        self.assertEqual(result.pixels.get(0, 0), Pixel(255, 255, 0))
        self.assertEqual(result.pixels.get(1, 2), Pixel(185, 175, 165))
        with open(output, "rb") as f, open(self.input, "rb") as g:
            self.assertEqual(f.read()[:54], g.read()[:54])

    def test_convert_rejects(self):
        path = self.write_file("bad.bmp", self.sample(bits_per_pixel=8))
        output = os.path.join(self.dir, "out.bmp")
        with self.assertRaises(UnsupportedFormatError):
            negate_bmp.convert(path, output)
        self.assertFalse(os.path.exists(output))

    def test_main_success(self):
        output = os.path.join(self.dir, "out.bmp")
        code, out, err = self.run_main([self.input, "-o", output])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(output))
        self.assertIn("Width:               3", out)
        self.assertIn("Bits per Pixel:      24", out)
        self.assertEqual(err, "")

    def test_quiet(self):
        output = os.path.join(self.dir, "out.bmp")
        code, out, _ = self.run_main([self.input, "-o", output, "-q"])
        self.assertEqual(code, 0)
        self.assertEqual(out, "")

    def test_default_output_path(self):
        cwd = os.getcwd()
        os.chdir(self.dir)
        try:
            code, _, _ = self.run_main(["in.bmp", "-q"])
        finally:
            os.chdir(cwd)
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(os.path.join(self.dir, negate_bmp.DEFAULT_OUTPUT_PATH)))

    def test_prompts_for_input(self):
        output = os.path.join(self.dir, "out.bmp")
        code, _, _ = self.run_main(["-o", output, "-q"], stdin=[self.input])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(output))

    def test_empty_prompt(self):
        code, _, err = self.run_main(["-q"], stdin=EOFError())
        self.assertEqual(code, 1)
        self.assertIn("ERROR", err)

    def test_failures(self):
        cases = {
            "signature": self.sample(signature=b'BZ'),
            "bits_per_pixel": self.sample(bits_per_pixel=8),
            "compression": self.sample(compression=1),
            "color_planes": self.sample(color_planes=0),
            "width": self.sample(width=0),
            "bytes": self.sample()[:60],
            "pixel array": self.sample(width=0x7FFFFFFF),
        }
        output = os.path.join(self.dir, "out.bmp")
        for field, data in cases.items():
            with self.subTest(field=field):
                path = self.write_file(f"{field}.bmp", data)
                code, _, err = self.run_main([path, "-o", output, "-q"])
                self.assertEqual(code, 1)
                self.assertTrue(err.startswith("ERROR:"))
                self.assertIn(field, err)

    def test_headers_printed_for_rejected_file(self):
        path = self.write_file("bad.bmp", self.sample(bits_per_pixel=8))
        code, out, err = self.run_main([path, "-o", os.path.join(self.dir, "out.bmp")])
        self.assertEqual(code, 1)
        self.assertIn("Bits per Pixel:      8", out)
        self.assertIn("bits_per_pixel", err)

    def test_missing_input(self):
        code, _, err = self.run_main([os.path.join(self.dir, "nope.bmp"), "-q"])
        self.assertEqual(code, 1)
        self.assertIn("ERROR", err)

    def test_unwritable_output(self):
        output = os.path.join(self.dir, "missing", "out.bmp")
        code, _, err = self.run_main([self.input, "-o", output, "-q"])
        self.assertEqual(code, 1)
        self.assertIn("ERROR", err)


if __name__ == '__main__':
    unittest.main()

import logging
import unittest

import pytest

from oox.docx.package import DocxPackage
from oox.exceptions import PackageFormatNotSupportedError
from oox.pptx.package import PptxPackage
from oox.router import detect_file_type, get_loader, is_supported_file

logger = logging.getLogger(__name__)

tc = unittest.TestCase()


def test_is_supported():
    tc.assertTrue(is_supported_file("myfile.docx"))
    tc.assertTrue(is_supported_file("myfile.docm"))
    tc.assertTrue(is_supported_file("myfile.dotx"))
    tc.assertTrue(is_supported_file("myfile.pptx"))
    tc.assertTrue(is_supported_file("myfile.pptm"))
    tc.assertTrue(is_supported_file("myfile.ppsx"))
    tc.assertTrue(is_supported_file("MYFILE.DOCX"))

    tc.assertFalse(is_supported_file("myfile.doc"))
    tc.assertFalse(is_supported_file("myfile.xlsx"))
    tc.assertFalse(is_supported_file("myfile.txt"))


def test_detect_file_type():
    tc.assertEqual("docx", detect_file_type("folder/report.docx"))
    tc.assertEqual("pptx", detect_file_type("deck.pptx"))
    tc.assertIsNone(detect_file_type("archive.zip"))


def test_router():
    # docx
    func = get_loader("myfile.docx")
    tc.assertEqual(DocxPackage.from_bytes, func)

    # docm
    func = get_loader("myfile.docm")
    tc.assertEqual(DocxPackage.from_bytes, func)

    # pptx
    func = get_loader("myfile.pptx")
    tc.assertEqual(PptxPackage.from_bytes, func)

    # not supported
    with pytest.raises(PackageFormatNotSupportedError):
        get_loader("myfile.pdf")

# License: BSD 3 clause
"""
Tests for the LibSVM, CSV and ARFF readers.
"""

import logging
import unittest
from io import BytesIO, StringIO
from unittest.mock import MagicMock, patch

from fsio.data import ARFFReader, CSVReader, LibSVMReader, Reader, read, read_url
from fsio.data.readers import split_with_quotes
from fsio.errors import ConfigurationError, MalformedInputError
from tests import other_dir
from tests.utils import make_weather_dataset


class TestSplitWithQuotes(unittest.TestCase):
    """Test class for the quote-aware tokenizer."""

    def test_quoted_delimiter(self):
        self.assertEqual(split_with_quotes('a,"b,c",d'), ["a", "b,c", "d"])

    def test_regex_delimiter(self):
        self.assertEqual(split_with_quotes("a,  b,\tc", r",\s*"), ["a", "b", "c"])
        self.assertEqual(split_with_quotes('0 "big red"', r"\s+"), ["0", "big red"])

    def test_other_quote_char(self):
        self.assertEqual(split_with_quotes("'a,b',c", quote_char="'"), ["a,b", "c"])
        self.assertEqual(split_with_quotes('"a,b",c', quote_char="'"), ['"a', 'b"', "c"])

    def test_empty_tokens(self):
        self.assertEqual(split_with_quotes("a,,b"), ["a", "", "b"])
        self.assertEqual(split_with_quotes("a,"), ["a", ""])
        self.assertEqual(split_with_quotes('""'), [""])
        self.assertEqual(split_with_quotes(""), [])

    def test_unbalanced_quotes(self):
        with self.assertRaises(MalformedInputError):
            split_with_quotes('a,"b,c')


class TestReaderFactory(unittest.TestCase):
    """Test class for choosing readers."""

    def test_for_path(self):
        self.assertIsInstance(Reader.for_path("x.arff"), ARFFReader)
        self.assertIsInstance(Reader.for_path("x.CSV"), CSVReader)
        self.assertIsInstance(Reader.for_path("x.libsvm"), LibSVMReader)
        self.assertIsInstance(Reader.for_path("x.svm"), LibSVMReader)

    def test_for_path_invalid_extension(self):
        with self.assertRaises(ConfigurationError):
            Reader.for_path("x.jsonlines")

    def test_for_format(self):
        self.assertIsInstance(Reader.for_format("x", "WEKA"), ARFFReader)
        self.assertIsInstance(Reader.for_format("x", "arff"), ARFFReader)
        self.assertIsInstance(Reader.for_format("x", "csv"), CSVReader)
        self.assertIsInstance(Reader.for_format("x", "LibSVM"), LibSVMReader)

    def test_invalid_format(self):
        with self.assertRaises(ConfigurationError):
            read(other_dir / "toy.csv", "tsv")


class TestLibSVMReader(unittest.TestCase):
    """Test class for reading LibSVM files."""

    def test_read_file(self):
        dataset = read(other_dir / "toy.libsvm", "libsvm")
        self.assertEqual(dataset.classes, ["1", "2"])
        self.assertEqual(dataset.features, ["1", "2", "3", "10"])
        self.assertEqual(dataset.feature_types, {"1": "real", "2": "real",
                                                 "3": "real", "10": "real"})
        self.assertEqual(dataset.samples("1"), ({"1": 0.5, "3": 2.0},
                                                {"3": -1.0, "10": 4.0}))
        self.assertEqual(dataset.samples("2"), ({"2": 1.5},))
        self.assertEqual(dataset.name, str(other_dir / "toy.libsvm"))

    def test_name_mapping_comment(self):
        text = ("1 1:2 3:0.5 # 1=spam | 1=free 3=big\u2002deal\n"
                "2 2:1 # 2=ham\u2236x | 2=win\n")
        dataset = read(StringIO(text), "libsvm")
        self.assertEqual(dataset.classes, ["spam", "ham:x"])
        self.assertEqual(dataset.features, ["free", "win", "big deal"])
        self.assertEqual(dataset.samples("spam"), ({"free": 2.0, "big deal": 0.5},))
        self.assertEqual(dataset.samples("ham:x"), ({"win": 1.0},))

    def test_non_numeric_indices_keep_first_seen_order(self):
        dataset = read(StringIO("a x:1 b:2\nb a:3\n"), "libsvm")
        self.assertEqual(dataset.features, ["x", "b", "a"])

    def test_bad_pair(self):
        with self.assertRaises(MalformedInputError) as context:
            read(StringIO("1 1:2\n1 3\n"), "libsvm")
        self.assertEqual(context.exception.line_num, 2)

    def test_bad_value(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("1 1:abc\n"), "libsvm")

    def test_bad_mapping_comment(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("1 1:2 # spam | free\n"), "libsvm")

    def test_read_stdin(self):
        with patch("sys.stdin", new=StringIO("+1 1:1\n-1 2:1\n")) as fake_in:
            dataset = read("-", "libsvm")
            self.assertFalse(fake_in.closed)
        self.assertEqual(dataset.classes, ["+1", "-1"])
        self.assertEqual(dataset.name, "<stdin>")

    def test_read_binary_stream(self):
        stream = BytesIO("1 1:1 # 1=café | 1=naïve\n".encode("utf-8"))
        dataset = read(stream, "libsvm")
        self.assertEqual(dataset.classes, ["café"])
        self.assertEqual(dataset.features, ["naïve"])


class TestCSVReader(unittest.TestCase):
    """Test class for reading CSV files."""

    def test_read_file(self):
        dataset = read(other_dir / "toy.csv", "csv")
        self.assertEqual(dataset.features, ["outlook", "temperature", "humidity"])
        self.assertEqual(dataset.feature_types, {"outlook": "nominal",
                                                 "temperature": "real",
                                                 "humidity": "integer"})
        self.assertEqual(dataset.classes, ["no", "yes"])
        self.assertEqual(dataset.samples("no"),
                         ({"outlook": "sunny", "temperature": 85.0, "humidity": 85},))
        self.assertEqual(dataset.samples("yes"),
                         ({"outlook": "overcast", "humidity": 86},
                          {"outlook": "rainy, windy", "temperature": 70.5}))

    def test_trailing_empty_cell_is_missing(self):
        text = "f1,f2\ninteger,integer\nc1,1,\n"
        dataset = read(StringIO(text), "csv")
        self.assertEqual(dataset.samples("c1"), ({"f1": 1},))
        self.assertIsInstance(dataset.samples("c1")[0]["f1"], int)

    def test_short_row_leaves_features_missing(self):
        dataset = read(StringIO("f1,f2\nreal,real\nc1,1\n"), "csv")
        self.assertEqual(dataset.samples("c1"), ({"f1": 1.0},))

    def test_class_label_column(self):
        text = "f1,f2\ninteger,string\n1,c1,x\n2,c2,y\n"
        dataset = read(StringIO(text), "csv", class_label_column=2)
        self.assertEqual(dataset.classes, ["c1", "c2"])
        self.assertEqual(dataset.samples("c2"), ({"f1": 2, "f2": "y"},))

    def test_feature_name2type(self):
        text = "c1,1,a\nc2,,b\n"
        dataset = read(StringIO(text), "csv",
                       feature_name2type={"n": "int", "s": "categorical"})
        self.assertEqual(dataset.features, ["n", "s"])
        self.assertEqual(dataset.feature_types, {"n": "integer", "s": "nominal"})
        self.assertEqual(dataset.samples("c1"), ({"n": 1, "s": "a"},))
        self.assertEqual(dataset.samples("c2"), ({"s": "b"},))

    def test_custom_header_rows(self):
        text = "integer\nf1\nc1,4\n"
        dataset = read(StringIO(text), "csv", feature_name_row=2, feature_type_row=1)
        self.assertEqual(dataset.samples("c1"), ({"f1": 4},))

    def test_invalid_label_column(self):
        with self.assertRaises(ConfigurationError):
            CSVReader(StringIO(""), class_label_column=0)

    def test_label_column_beyond_row(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("f1\ninteger\n1\n"), "csv", class_label_column=3)

    def test_too_many_cells(self):
        with self.assertRaises(MalformedInputError) as context:
            read(StringIO("f1\ninteger\nc1,1\nc1,1,2\n"), "csv")
        self.assertEqual(context.exception.line_num, 4)
        self.assertIn("line 4", str(context.exception))

    def test_invalid_type(self):
        with self.assertRaises(ConfigurationError):
            read(StringIO("f1\nblob\nc1,1\n"), "csv")

    def test_invalid_value(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("f1\ninteger\nc1,one\n"), "csv")

    def test_data_before_header(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("c1,1\nf1\ninteger\n"), "csv",
                 feature_name_row=2, feature_type_row=3)

    def test_empty_file(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO(""), "csv")

    def test_mismatched_header_rows(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("f1,f2\ninteger\nc1,1,2\n"), "csv")

    def test_duplicate_feature_names(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("f1,f1\ninteger,integer\n"), "csv")

    def test_caller_stream_stays_open(self):
        stream = StringIO("f1\ninteger\nc1,1\n")
        read(stream, "csv")
        self.assertFalse(stream.closed)


class TestARFFReader(unittest.TestCase):
    """Test class for reading ARFF files."""

    def test_read_dense_file(self):
        dataset = read(other_dir / "toy.arff", "weka")
        self.assertEqual(dataset, make_weather_dataset())
        self.assertEqual(dataset.relation, "weather")
        self.assertEqual(dataset.comments, ["% toy weather data",
                                            "% used by the reader tests",
                                            "% trailing comment"])

    def test_read_sparse_file(self):
        dataset = read(other_dir / "toy_sparse.arff", "arff")
        self.assertEqual(dataset.classes, ["c1", "c2"])
        self.assertEqual(dataset.samples("c1"), ({"f0": 0, "f1": 5, "f2": 0},
                                                 {"f0": 1, "f1": 2, "f2": 3}))
        # "?" in a sparse row is missing; unlisted features are zero
        self.assertEqual(dataset.samples("c2"), ({"f1": 0, "f2": 0},))

    def test_sparse_zero_fill_per_type(self):
        text = ("@relation r\n"
                "@attribute i integer\n"
                "@attribute x real\n"
                "@attribute s string\n"
                "@attribute n {a,b}\n"
                "@attribute d date\n"
                "@attribute class {k}\n"
                "@data\n"
                "{5 k}\n")
        dataset = read(StringIO(text), "weka")
        sample = dataset.samples("k")[0]
        self.assertEqual(sample, {"i": 0, "x": 0.0, "s": 0, "n": 0, "d": 0})
        self.assertIsInstance(sample["x"], float)
        self.assertIsInstance(sample["n"], int)

    def test_sparse_duplicate_index_last_wins(self):
        text = "@attribute a integer\n@attribute class {k}\n@data\n{0 1, 0 2, 1 k}\n"
        dataset = read(StringIO(text), "weka")
        self.assertEqual(dataset.samples("k"), ({"a": 2},))

    def test_mixed_dense_and_sparse_rows(self):
        text = ("@attribute a integer\n@attribute b integer\n@attribute class {k}\n"
                "@data\n1,?,k\n{1 3, 2 k}\n")
        dataset = read(StringIO(text), "weka")
        self.assertEqual(dataset.samples("k"), ({"a": 1}, {"a": 0, "b": 3}))

    def test_quoted_tokens(self):
        text = ("@relation 'my data'\n"
                "@attribute 'big color' {'light red',blue}\n"
                "@attribute class {'yes please',no}\n"
                "@data\n"
                "'light red','yes please'\n"
                "{0 'light red', 1 no}\n")
        dataset = read(StringIO(text), "weka", quote_char="'")
        self.assertEqual(dataset.relation, "my data")
        self.assertEqual(dataset.features, ["big color"])
        self.assertEqual(dataset.classes, ["yes please", "no"])
        self.assertEqual(dataset.samples("yes please"), ({"big color": "light red"},))
        self.assertEqual(dataset.samples("no"), ({"big color": "light red"},))

    def test_case_insensitive_keywords_and_tabs(self):
        text = "@Relation r\n@Attribute\ta\tNumeric\n@ATTRIBUTE Class {x}\n@Data\n1.5,x\n"
        dataset = read(StringIO(text), "weka")
        self.assertEqual(dataset.feature_types, {"a": "real"})
        self.assertEqual(dataset.samples("x"), ({"a": 1.5},))

    def test_declared_class_without_samples(self):
        text = "@attribute a integer\n@attribute class {x,y}\n@data\n1,x\n"
        dataset = read(StringIO(text), "weka")
        self.assertEqual(dataset.classes, ["x", "y"])
        self.assertEqual(dataset.class_size("y"), 0)

    def test_missing_class_attribute(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("@attribute a integer\n@data\n"), "weka")

    def test_data_before_class_attribute(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("@attribute a integer\n@data\n1\n"), "weka")

    def test_missing_data_section(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("@attribute a integer\n@attribute class {x}\n"), "weka")

    def test_undeclared_label(self):
        text = "@attribute a integer\n@attribute class {x}\n@data\n1,y\n"
        with self.assertRaises(MalformedInputError) as context:
            read(StringIO(text), "weka")
        self.assertEqual(context.exception.line_num, 4)

    def test_dense_width_mismatch(self):
        text = "@attribute a integer\n@attribute class {x}\n@data\n1,2,x\n"
        with self.assertRaises(MalformedInputError):
            read(StringIO(text), "weka")

    def test_sparse_index_out_of_range(self):
        text = "@attribute a integer\n@attribute class {x}\n@data\n{3 1, 1 x}\n"
        with self.assertRaises(MalformedInputError):
            read(StringIO(text), "weka")

    def test_sparse_bad_index(self):
        text = "@attribute a integer\n@attribute class {x}\n@data\n{a 1, 1 x}\n"
        with self.assertRaises(MalformedInputError):
            read(StringIO(text), "weka")

    def test_unknown_attribute_type(self):
        text = "@attribute a relational\n@attribute class {x}\n@data\n"
        with self.assertRaises(ConfigurationError):
            read(StringIO(text), "weka")

    def test_unrecognized_header_line(self):
        with self.assertRaises(MalformedInputError):
            read(StringIO("@relation r\nhello\n"), "weka")

    def test_unbalanced_quotes(self):
        text = '@attribute a string\n@attribute class {x}\n@data\n"oops,x\n'
        with self.assertRaises(MalformedInputError) as context:
            read(StringIO(text), "weka")
        self.assertEqual(context.exception.line_num, 4)

    def test_duplicate_attribute(self):
        text = "@attribute a integer\n@attribute a real\n@attribute class {x}\n@data\n"
        with self.assertRaises(MalformedInputError):
            read(StringIO(text), "weka")

    def test_invalid_quote_char(self):
        with self.assertRaises(ConfigurationError):
            ARFFReader(StringIO(""), quote_char="")


class TestReaderLogging(unittest.TestCase):
    """Test class for reader logging and progress output."""

    def test_debug_messages(self):
        logger = logging.getLogger("test_reader_debug_messages")
        with self.assertLogs(logger, level="DEBUG") as logs:
            read(other_dir / "toy.libsvm", "libsvm", logger=logger)
        self.assertTrue(any("Read 3 samples in 2 classes" in msg for msg in logs.output))

    def test_progress_output(self):
        with patch("sys.stderr", new=StringIO()) as fake_err:
            read(other_dir / "toy.libsvm", "libsvm", quiet=False)
        self.assertIn("Loading", fake_err.getvalue())
        self.assertIn("done", fake_err.getvalue())


class TestReadURL(unittest.TestCase):
    """Test class for reading datasets over the network."""

    def test_read_url(self):
        response = MagicMock()
        response.read.return_value = b"1 1:1\n2 2:1\n"
        with patch("fsio.data.readers.urlopen") as urlopen_mock:
            urlopen_mock.return_value.__enter__.return_value = response
            dataset = read_url("http://example.com/data set.libsvm", "libsvm")
        urlopen_mock.assert_called_once_with("http://example.com/data%20set.libsvm")
        self.assertEqual(dataset.classes, ["1", "2"])
        self.assertEqual(dataset.name, "http://example.com/data set.libsvm")

    def test_read_url_invalid_format(self):
        with patch("fsio.data.readers.urlopen") as urlopen_mock:
            with self.assertRaises(ConfigurationError):
                read_url("http://example.com/data.txt", "txt")
        urlopen_mock.assert_not_called()

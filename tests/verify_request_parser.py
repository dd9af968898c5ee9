import io
import os
import sys
import unittest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.network_utils import NetworkUtils
from server.http_request import MalformedRequestError, extract_query_param, parse_request, url_decode


def reader_for(data: bytes):
    return io.BufferedReader(io.BytesIO(data))


class TestParseRequest(unittest.TestCase):
    def test_request_line_and_headers(self):
        request = parse_request(reader_for(
            b"GET /download?filename=a.txt HTTP/1.1\r\nHost: localhost:8080\r\nConnection: close\r\n\r\n"
        ))
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.path, "/download?filename=a.txt")
        self.assertEqual(request.version, "HTTP/1.1")
        self.assertEqual(request.headers, {"host": "localhost:8080", "connection": "close"})

    def test_bare_lf_line_endings(self):
        request = parse_request(reader_for(b"POST /upload HTTP/1.1\nContent-Length: 3\n\nabc"))
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.get_header("Content-Length"), "3")

    def test_header_keys_are_case_insensitive(self):
        request = parse_request(reader_for(b"POST /upload HTTP/1.1\r\nCONTENT-LENGTH: 7\r\n\r\n"))
        self.assertEqual(request.get_header("content-length"), "7")
        self.assertEqual(request.get_header("Content-Length"), "7")

    def test_duplicate_header_last_wins(self):
        request = parse_request(reader_for(
            b"POST /upload HTTP/1.1\r\nX-Filename: a.txt\r\nx-filename: b.png\r\n\r\n"
        ))
        self.assertEqual(request.get_header("X-Filename"), "b.png")

    def test_lines_without_separator_are_skipped(self):
        request = parse_request(reader_for(
            b"GET / HTTP/1.1\r\nnot a header\r\nKey:no-space\r\nHost: h\r\n\r\n"
        ))
        self.assertEqual(request.headers, {"host": "h"})

    def test_value_keeps_everything_after_first_separator(self):
        request = parse_request(reader_for(b"GET / HTTP/1.1\r\nX-Note: a: b\r\n\r\n"))
        self.assertEqual(request.get_header("x-note"), "a: b")

    def test_body_is_not_consumed(self):
        reader = reader_for(b"POST /upload HTTP/1.1\r\nContent-Length: 5\r\n\r\nhello")
        parse_request(reader)
        self.assertEqual(reader.read(), b"hello")

    def test_wrong_token_count_is_malformed(self):
        for line in (b"GET /download\r\n\r\n", b"GET  /x HTTP/1.1\r\n\r\n", b"GET /a b HTTP/1.1\r\n\r\n"):
            with self.subTest(line=line):
                with self.assertRaises(MalformedRequestError):
                    parse_request(reader_for(line))

    def test_trailing_spaces_in_request_line_are_ignored(self):
        request = parse_request(reader_for(b"GET /download?filename=a.txt HTTP/1.1  \r\n\r\n"))
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.path, "/download?filename=a.txt")
        self.assertEqual(request.version, "HTTP/1.1")

    def test_empty_stream_is_malformed(self):
        with self.assertRaises(MalformedRequestError):
            parse_request(reader_for(b""))

    def test_eof_before_blank_line_is_malformed(self):
        with self.assertRaises(MalformedRequestError):
            parse_request(reader_for(b"GET /download?filename=a HTTP/1.1\r\nHost: x\r\n"))

    def test_overlong_line_is_malformed(self):
        data = b"GET /" + b"a" * (NetworkUtils.MAX_LINE + 10) + b" HTTP/1.1\r\n\r\n"
        with self.assertRaises(MalformedRequestError):
            parse_request(reader_for(data))


class TestQueryExtraction(unittest.TestCase):
    def test_filename_param(self):
        self.assertEqual(extract_query_param("/download?filename=report.txt", "filename"), "report.txt")

    def test_param_among_others(self):
        self.assertEqual(extract_query_param("/download?x=1&filename=b.bin&y", "filename"), "b.bin")

    def test_missing_query_or_param(self):
        self.assertIsNone(extract_query_param("/download", "filename"))
        self.assertIsNone(extract_query_param("/download?name=a", "filename"))
        self.assertIsNone(extract_query_param("/download?filename", "filename"))

    def test_value_is_url_decoded(self):
        self.assertEqual(extract_query_param("/download?filename=my%20file+2.txt", "filename"), "my file 2.txt")
        self.assertEqual(extract_query_param("/download?filename=%C3%B1and%C3%BA.txt", "filename"), "ñandú.txt")

    def test_value_split_on_first_equals(self):
        self.assertEqual(extract_query_param("/download?filename=a=b", "filename"), "a=b")

    def test_bad_encoding_returns_raw_value(self):
        self.assertEqual(url_decode("100%.txt"), "100%.txt")
        self.assertEqual(url_decode("%zz"), "%zz")
        self.assertEqual(url_decode("%FF%FE"), "%FF%FE")


if __name__ == '__main__':
    unittest.main()

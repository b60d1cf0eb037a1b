import hashlib
import unittest

from streamdigest import md5, sha256
from streamdigest.errors import InvalidStateIdentifier, InvalidStateSize, StateError
from streamdigest.md5 import MD5
from streamdigest.md5_core import IV
from streamdigest.sha256 import SHA224, SHA256

CONSTRUCTORS = {
    "md5": md5.new,
    "sha224": sha256.new224,
    "sha256": sha256.new,
}


class TestStateLayout(unittest.TestCase):
    def test_sizes(self) -> None:
        self.assertEqual(MD5.state_size(), 92)
        self.assertEqual(SHA224.state_size(), 108)
        self.assertEqual(SHA256.state_size(), 108)
        self.assertEqual(len(md5.new().export_state()), 92)
        self.assertEqual(len(sha256.new().export_state()), 108)
        self.assertEqual(len(sha256.new224().export_state()), 108)

    def test_magic_tags(self) -> None:
        self.assertEqual(md5.new().export_state()[:4], b"md5\x01")
        self.assertEqual(sha256.new224().export_state()[:4], b"sha\x02")
        self.assertEqual(sha256.new().export_state()[:4], b"sha\x03")

    def test_md5_words_are_big_endian(self) -> None:
        blob = md5.new().export_state()
        for i, w in enumerate(IV):
            self.assertEqual(blob[4 + 4 * i : 8 + 4 * i], w.to_bytes(4, "big"))

    def test_buffer_and_length_fields(self) -> None:
        d = md5.new()
        d.write(b"z" * 70)
        blob = d.export_state()
        buf = blob[20:84]
        self.assertEqual(buf, b"z" * 6 + bytes(58))
        self.assertEqual(blob[84:], (70).to_bytes(8, "big"))

    def test_unused_buffer_written_as_zero(self) -> None:
        d = sha256.new()
        d.write(b"\xff" * 60)
        d.write(b"\xff" * 10)  # compresses, leaves 6 stale bytes past fill_len
        blob = d.export_state()
        self.assertEqual(blob[36:100], b"\xff" * 6 + bytes(58))


class TestStateRoundTrip(unittest.TestCase):
    def test_resume_matches_uninterrupted(self) -> None:
        data = bytes((i * 13 + 1) & 0xFF for i in range(400))
        for name, ctor in CONSTRUCTORS.items():
            for cut in (0, 1, 55, 56, 63, 64, 65, 200, 400):
                live = ctor()
                live.write(data[:cut])
                restored = ctor()
                restored.import_state(live.export_state())
                self.assertEqual(restored.total_len, cut)
                live.write(data[cut:])
                restored.write(data[cut:])
                self.assertEqual(restored.sum(), live.sum(), (name, cut))
                self.assertEqual(restored.sum(), hashlib.new(name, data).digest())

    def test_export_does_not_disturb(self) -> None:
        d = sha256.new()
        d.write(b"abc")
        d.export_state()
        self.assertEqual(d.sum(), hashlib.sha256(b"abc").digest())

    def test_from_state(self) -> None:
        d = sha256.new224()
        d.write(b"partial")
        r = SHA224.from_state(d.export_state())
        self.assertIsInstance(r, SHA224)
        r.write(b" message")
        self.assertEqual(r.sum(), hashlib.sha224(b"partial message").digest())

    def test_reexport_is_identical(self) -> None:
        d = md5.new()
        d.write(b"q" * 77)
        blob = d.export_state()
        self.assertEqual(MD5.from_state(blob).export_state(), blob)


class TestStateErrors(unittest.TestCase):
    def test_wrong_magic(self) -> None:
        blob = bytearray(md5.new().export_state())
        blob[0] ^= 0xFF
        with self.assertRaises(InvalidStateIdentifier):
            md5.new().import_state(bytes(blob))

    def test_wrong_size(self) -> None:
        blob = sha256.new().export_state()
        with self.assertRaises(InvalidStateSize):
            sha256.new().import_state(blob[:-1])
        with self.assertRaises(InvalidStateSize):
            sha256.new().import_state(blob + b"\x00")

    def test_errors_are_distinct(self) -> None:
        self.assertFalse(issubclass(InvalidStateIdentifier, InvalidStateSize))
        self.assertFalse(issubclass(InvalidStateSize, InvalidStateIdentifier))
        self.assertTrue(issubclass(InvalidStateIdentifier, StateError))
        self.assertTrue(issubclass(InvalidStateSize, ValueError))

    def test_too_short_for_magic(self) -> None:
        with self.assertRaises(InvalidStateIdentifier):
            md5.new().import_state(b"md")

    def test_variant_mismatch(self) -> None:
        with self.assertRaises(InvalidStateIdentifier):
            sha256.new().import_state(sha256.new224().export_state())
        with self.assertRaises(InvalidStateIdentifier):
            sha256.new224().import_state(sha256.new().export_state())
        with self.assertRaises(InvalidStateIdentifier):
            sha256.new().import_state(md5.new().export_state())

    def test_failed_import_leaves_instance_untouched(self) -> None:
        d = md5.new()
        d.write(b"keep me")
        with self.assertRaises(InvalidStateSize):
            d.import_state(b"md5\x01" + bytes(10))
        self.assertEqual(d.sum(), hashlib.md5(b"keep me").digest())


if __name__ == "__main__":
    unittest.main()

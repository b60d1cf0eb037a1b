import hashlib
import unittest

from streamdigest.core import words_to_bytes_be
from streamdigest.sha256 import new, new224, sha224_hex, sha256_hex, sum224, sum256
from streamdigest.sha256_core import IV224, IV256, compress_block, message_schedule, process_blocks

ABC448 = b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"


class TestSHA256Core(unittest.TestCase):
    def test_fips_vectors(self) -> None:
        self.assertEqual(
            sha256_hex(b""),
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
        )
        self.assertEqual(
            sha256_hex(b"abc"),
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad",
        )
        self.assertEqual(
            sha224_hex(b"abc"),
            "23097d223405d8228642a477bda255b32aadbce4bda0b3f7e36c9da7",
        )
        # 56 bytes: padding spills into a second block
        self.assertEqual(len(ABC448), 56)
        self.assertEqual(
            sha256_hex(ABC448),
            "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1",
        )
        self.assertEqual(
            sha224_hex(ABC448),
            "75388b16512776cc5dba5da1fd890150b0c6455cb4f58b1952522525",
        )

    def test_matches_hashlib(self) -> None:
        for n in (0, 1, 3, 55, 56, 63, 64, 65, 127, 128, 1000):
            m = bytes((i * 31 + 7) & 0xFF for i in range(n))
            self.assertEqual(sum256(m), hashlib.sha256(m).digest())
            self.assertEqual(sum224(m), hashlib.sha224(m).digest())

    def test_sizes(self) -> None:
        self.assertEqual(len(sum256(b"x")), 32)
        self.assertEqual(len(sum224(b"x")), 28)
        self.assertEqual(new().digest_size, 32)
        self.assertEqual(new224().digest_size, 28)
        self.assertEqual(new().block_size, 64)

    def test_sha224_is_truncated_sha256_compression(self) -> None:
        block = b"abc" + b"\x80" + b"\x00" * 52 + (24).to_bytes(8, "big")
        h = compress_block(IV224, block)
        self.assertEqual(words_to_bytes_be(h[:7]), hashlib.sha224(b"abc").digest())
        h = compress_block(IV256, block)
        self.assertEqual(words_to_bytes_be(h), hashlib.sha256(b"abc").digest())

    def test_process_blocks(self) -> None:
        data = bytes(range(256)) * 2
        h = IV256
        for off in range(0, len(data), 64):
            h = compress_block(h, data, off)
        self.assertEqual(process_blocks(IV256, data), h)

    def test_message_schedule_prefix_is_block_words(self) -> None:
        block = bytes(range(64))
        w = message_schedule(block)
        self.assertEqual(len(w), 64)
        self.assertEqual(w[0], 0x00010203)
        self.assertEqual(w[15], 0x3C3D3E3F)


if __name__ == "__main__":
    unittest.main()

"""purebcrypt.handlers.bcrypt unitests (and parallel test against pyca bcrypt)

The known vectors were taken from the jBcrypt unitests,
released under the following license:

    // Permission to use, copy, modify, and distribute this software for any
    // purpose with or without fee is hereby granted, provided that the above
    // copyright notice and this permission notice appear in all copies.
    //
    // THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
    // WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
    // MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
    // ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
    // WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
    // ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
    // OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.

"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
from unittest import mock, skipUnless
#site
try:
    import bcrypt as pybcrypt
except ImportError:
    pybcrypt = None
#pkg
from purebcrypt.exc import BcryptError, InvalidSaltError, InvalidRoundsError, \
                           InvalidVersionError, InvalidHashFormatError, \
                           PasswordSizeError
from purebcrypt.handlers import bcrypt as bcrypt_mod
from purebcrypt.handlers.bcrypt import BCrypt
from purebcrypt.tests.utils import TestCase, enable_option

#=========================================================
#test vectors
#=========================================================

#: (password, hash) pairs at cost 6; fast enough to always run
known_correct = [
    ('', '$2a$06$DCq7YPn5Rq63x1Lad4cll.TV4S6ytwfsfvkgY8jIucDrjc8deX1s.'),
    ('a', '$2a$06$m0CrhHm10qJ3lXRY.5zDGO3rS2KdeeWLuGmsfGlMfOxih58VYVfxe'),
    ('abc', '$2a$06$If6bvum7DFjUnE9p2uDeDu0YHzrHM6tf.iqN8.yx.jNN1ILEf7h0i'),
    ('abcdefghijklmnopqrstuvwxyz', '$2a$06$.rCVZVOThsIa97pEDOxvGuRRgzG64bvtJ0938xuqzv18d3ZpQhstC'),
    ('~!@#$%^&*()      ~!@#$%^&*()PNBFRD', '$2a$06$fPIsBO8qRqkjj273rfaOI.HtSV9jLDpTbZn782DC6/t7qT67P6FfO'),
]

#: higher cost vectors, only run with PUREBCRYPT_TESTS=slow
known_correct_slow = [
    ('', '$2a$08$HqWuK6/Ng6sg9gQzbLrgb.Tl.ZHfXLhvt/SgVyWhQqgqcZ7ZuUtye'),
    ('a', '$2a$08$cfcvVd2aQ8CMvoMpP2EBfeodLEkkFJ9umNEfPD18.hUF62qqlC/V.'),
    ('abc', '$2a$08$Ro0CUfOqk6cXEKf3dyaM7OhSCvnwM9s4wIX9JeLapehKK5YdLxKcm'),
    ('a', '$2a$10$k87L/MF28Q673VKh8/cPi.SUl7MU/rWuSiIDDFayrKk/1tBsSQu4u'),
    ('abc', '$2a$10$WvvTPHKwdBJ3uk0Z37EMR.hLA2W6N9AEBhEgrAOljy2Ae5MtaSIUi'),
    ('abcdefghijklmnopqrstuvwxyz', '$2a$10$fVH8e28OQRj9tqiDXs1e1uxpsjN0c7II7YPKXua2NAKYvM6iQk7dq'),
    ('~!@#$%^&*()      ~!@#$%^&*()PNBFRD', '$2a$10$LgfYWkbzEvQ4JakH7rOvHe0y8pHKF9OaFgwUZ2q7W2FFZmZzJYlfS'),
    ('', '$2a$12$k42ZFHFWqBp3vWli.nIn8uYyIkbvYRvodzbfbK18SSsY.CsIQPlxO'),
]

#: strings from_string() must reject, and the error each should raise
known_malformed = [
    ("", InvalidSaltError),
    ("not a hash", InvalidSaltError),
    ("$2a$", InvalidSaltError),
    ("$2a$10$", InvalidSaltError),
    ("$2a$10$tooshort", InvalidSaltError),
    ("$2a$99$1234567890123456789012", InvalidRoundsError),
    ("$2a$03$DCq7YPn5Rq63x1Lad4cll.", InvalidRoundsError),
    ("$2a$xx$DCq7YPn5Rq63x1Lad4cll.", InvalidRoundsError),
    ("$2x$06$DCq7YPn5Rq63x1Lad4cll.", InvalidVersionError),
    ("$3$06$DCq7YPn5Rq63x1Lad4cll.xxxx", InvalidVersionError),
    ("x2a$06$DCq7YPn5Rq63x1Lad4cll.TV4S6ytwfsfvkgY8jIucDrjc8deX1s.", InvalidSaltError),
    #bad char in otherwise correct hash
    ("$2a$12$EXRkfkdmXn!gzds2SSitu.MW9.gAVqa9eLS1//RYtYCmB1eLHg.9q", InvalidSaltError),
    #rounds not zero-padded
    ("$2a$6$DCq7YPn5Rq63x1Lad4cll.TV4S6ytwfsfvkgY8jIucDrjc8deX1s.", InvalidSaltError),
    #missing separator after rounds
    ("$2a$06DCq7YPn5Rq63x1Lad4cll.TV4S6ytwfsfvkgY8jIucDrjc8deX1s.", InvalidSaltError),
]

#=========================================================
#hash string format
#=========================================================
class FormatTest(TestCase):
    "test BCrypt.from_string() / to_string()"

    def test_parse_hash(self):
        self_ = BCrypt.from_string(known_correct[0][1])
        self.assertEqual(self_.ident, "2a")
        self.assertEqual(self_.rounds, 6)
        self.assertEqual(len(self_.salt), 16)
        self.assertEqual(self_.checksum, "TV4S6ytwfsfvkgY8jIucDrjc8deX1s.")
        self.assertEqual(self_.to_string(), known_correct[0][1])
        self.assertEqual(self_.to_string(withchk=False),
                         "$2a$06$DCq7YPn5Rq63x1Lad4cll.")

    def test_parse_config(self):
        self_ = BCrypt.from_string("$2b$31$DCq7YPn5Rq63x1Lad4cll.")
        self.assertEqual(self_.ident, "2b")
        self.assertEqual(self_.rounds, 31)
        self.assertIs(self_.checksum, None)
        self.assertEqual(self_.to_string(), "$2b$31$DCq7YPn5Rq63x1Lad4cll.")

    def test_parse_bytes(self):
        self_ = BCrypt.from_string(b"$2y$04$DCq7YPn5Rq63x1Lad4cll.")
        self.assertEqual(self_.ident, "2y")
        self.assertEqual(self_.rounds, 4)
        self.assertRaises(InvalidSaltError, BCrypt.from_string,
                          b"$2a$04$DCq7YPn5Rq63x1Lad4cl\xff.")
        self.assertRaises(TypeError, BCrypt.from_string, None)

    def test_malformed(self):
        for hash, error in known_malformed:
            with self.assertRaises(error, msg="hash %r:" % (hash,)):
                BCrypt.from_string(hash)
            # everything raised is part of the package's hierarchy
            self.assertRaises(BcryptError, BCrypt.from_string, hash)
            self.assertRaises(ValueError, BCrypt.from_string, hash)

    def test_invalid_rounds_value(self):
        with self.assertRaises(InvalidRoundsError) as ctx:
            BCrypt.from_string("$2a$99$1234567890123456789012")
        self.assertEqual(ctx.exception.rounds, 99)

        with self.assertRaises(InvalidRoundsError) as ctx:
            BCrypt.from_string("$2a$xx$DCq7YPn5Rq63x1Lad4cll.")
        self.assertEqual(ctx.exception.rounds, -1)

    def test_invalid_version_value(self):
        with self.assertRaises(InvalidVersionError) as ctx:
            BCrypt.from_string("$2x$06$DCq7YPn5Rq63x1Lad4cll.")
        self.assertEqual(ctx.exception.ident, "2x")

    def test_identify(self):
        self.assertTrue(BCrypt.identify(known_correct[0][1]))
        self.assertTrue(BCrypt.identify(b"$2b$10$"))
        self.assertFalse(BCrypt.identify("$1$abc"))
        self.assertFalse(BCrypt.identify(""))
        self.assertFalse(BCrypt.identify(None))

    def test_constructor(self):
        self_ = BCrypt(rounds=5, salt=b"\x00" * 16)
        self.assertEqual(self_.to_string(), "$2a$05$" + "." * 22)
        self.assertRaises(InvalidSaltError, BCrypt, salt=b"\x00" * 15)
        self.assertRaises(TypeError, BCrypt, salt="x" * 16)
        self.assertRaises(TypeError, BCrypt, rounds="10")
        self.assertRaises(TypeError, BCrypt, rounds=True)
        self.assertRaises(InvalidRoundsError, BCrypt, rounds=32)
        self.assertRaises(InvalidVersionError, BCrypt, ident="2")

    def test_genconfig(self):
        config = BCrypt.genconfig()
        self.assertEqual(len(config), 29)
        self.assertTrue(config.startswith("$2a$10$"))
        self.assertTrue(BCrypt.genconfig(rounds=4, ident="2y").startswith("$2y$04$"))

        # config strings must parse back
        self_ = BCrypt.from_string(config)
        self.assertEqual(self_.to_string(), config)

    def test_genconfig_unique(self):
        configs = set(BCrypt.genconfig(rounds=4) for _ in range(20))
        self.assertEqual(len(configs), 20)

    def test_genconfig_errors(self):
        self.assertRaises(InvalidRoundsError, BCrypt.genconfig, rounds=3)
        self.assertRaises(InvalidRoundsError, BCrypt.genconfig, rounds=32)
        self.assertRaises(InvalidVersionError, BCrypt.genconfig, ident="2c")

#=========================================================
#password normalization
#=========================================================
class NormalizeSecretTest(TestCase):
    "test BCrypt.normalize_secret()"

    def test_terminator(self):
        norm = BCrypt.normalize_secret
        self.assertEqual(norm(b""), b"\x00")
        self.assertEqual(norm("abc"), b"abc\x00")
        self.assertEqual(norm("é"), b"\xc3\xa9\x00")
        self.assertEqual(norm(b"a" * 71), b"a" * 71 + b"\x00")

    def test_truncate(self):
        norm = BCrypt.normalize_secret
        self.assertEqual(norm(b"a" * 72), b"a" * 72)
        self.assertEqual(norm(b"a" * 200), b"a" * 72)
        self.assertEqual(norm(b"abcdef", truncate_size=4), b"abcd")

    def test_truncate_error(self):
        norm = BCrypt.normalize_secret
        self.assertEqual(norm(b"a" * 72, truncate_error=True), b"a" * 72)
        with self.assertRaises(PasswordSizeError) as ctx:
            norm(b"a" * 73, truncate_error=True)
        self.assertEqual(ctx.exception.max_size, 72)
        self.assertRaises(PasswordSizeError, norm, b"abcde",
                          truncate_size=4, truncate_error=True)

    def test_truncate_size_range(self):
        self.assertRaises(ValueError, BCrypt.normalize_secret, b"", truncate_size=0)
        self.assertRaises(ValueError, BCrypt.normalize_secret, b"", truncate_size=73)

    def test_types(self):
        self.assertRaises(TypeError, BCrypt.normalize_secret, None)
        self.assertRaises(TypeError, BCrypt.normalize_secret, 123)

#=========================================================
#hash / verify
#=========================================================
class BCryptTest(TestCase):
    "test BCrypt.hash() / verify()"

    def test_known_correct(self):
        for secret, hash in known_correct:
            self.assertEqual(BCrypt.hash(secret, hash), hash,
                             "secret %r:" % (secret,))
            self.assertTrue(BCrypt.verify(secret, hash), "secret %r:" % (secret,))

    def test_known_correct_config(self):
        "test hashing from just the config prefix"
        secret, hash = known_correct[2]
        self.assertEqual(BCrypt.hash(secret, hash[:29]), hash)

    def test_known_correct_bytes(self):
        secret, hash = known_correct[1]
        self.assertEqual(BCrypt.hash(secret.encode("ascii"), hash), hash)
        self.assertTrue(BCrypt.verify(secret.encode("ascii"), hash.encode("ascii")))

    def test_known_10_rounds(self):
        "test the classic published cost 10 vector for the empty password"
        hash = '$2a$10$k1wbIrmNyFAPwPVPSVa/zecw2BCEnBwVS2GbrmgzxFUOqW9dk4TCW'
        self.assertEqual(BCrypt.hash('', hash[:29]), hash)

    def test_known_correct_slow(self):
        if not enable_option("slow"):
            raise self.skipTest("slow test vectors disabled")
        for secret, hash in known_correct_slow:
            self.assertTrue(BCrypt.verify(secret, hash), "secret %r:" % (secret,))

    def test_version_variants(self):
        "test 2b & 2y produce the same digest as 2a"
        for secret, hash in known_correct[:3]:
            for ident in ("2b", "2y"):
                other = "$%s%s" % (ident, hash[3:])
                self.assertEqual(BCrypt.hash(secret, other), other)
                self.assertTrue(BCrypt.verify(secret, other))

    def test_known_incorrect(self):
        for secret, hash in known_correct[:3]:
            self.assertFalse(BCrypt.verify(secret + "x", hash))
        self.assertFalse(BCrypt.verify("A", known_correct[1][1]))

    def test_roundtrip(self):
        for secret in ["", "password", "☃ snowman", b"\x00\xff"]:
            hash = BCrypt.hash(secret, BCrypt.genconfig(rounds=4))
            self.assertEqual(len(hash), 60)
            self.assertTrue(BCrypt.verify(secret, hash))

    def test_deterministic(self):
        config = BCrypt.genconfig(rounds=4)
        self.assertEqual(BCrypt.hash("stable", config),
                         BCrypt.hash("stable", config))

    def test_salt_matters(self):
        first = BCrypt.hash("password", BCrypt.genconfig(rounds=4))
        second = BCrypt.hash("password", BCrypt.genconfig(rounds=4))
        self.assertNotEqual(first, second)
        self.assertNotEqual(first[29:], second[29:])

    def test_avalanche(self):
        "test a one char change in the password changes the digest"
        config = BCrypt.genconfig(rounds=4)
        first = BCrypt.hash("password1", config)[29:]
        second = BCrypt.hash("password2", config)[29:]
        diff = sum(1 for a, b in zip(first, second) if a != b)
        self.assertGreater(diff, 15)

    def test_truncation(self):
        "test only the first 72 bytes of the password are used"
        config = BCrypt.genconfig(rounds=4)
        base = "x" * 72
        hash = BCrypt.hash(base, config)
        self.assertEqual(BCrypt.hash(base + "y", config), hash)
        self.assertEqual(BCrypt.hash(base + "z" * 100, config), hash)
        self.assertTrue(BCrypt.verify(base + "tail", hash))
        self.assertNotEqual(BCrypt.hash("x" * 71, config), hash)

    def test_truncate_error(self):
        config = BCrypt.genconfig(rounds=4)
        self.assertRaises(PasswordSizeError, BCrypt.hash, "x" * 73, config,
                          truncate_error=True)

    def test_format(self):
        hash = BCrypt.hash("format", BCrypt.genconfig(rounds=5, ident="2b"))
        self.assertEqual(len(hash), 60)
        self.assertTrue(hash.startswith("$2b$05$"))
        self.assertTrue(BCrypt.identify(hash))

    def test_malicious_salt(self):
        "test bad config strings never reach the digest engine"
        with mock.patch.object(bcrypt_mod, "raw_bcrypt") as engine:
            for hash, error in known_malformed:
                self.assertRaises(error, BCrypt.hash, "secret", hash)
                self.assertRaises(error, BCrypt.verify, "secret", hash)
        self.assertFalse(engine.called)

    def test_verify_needs_checksum(self):
        secret, hash = known_correct[0]
        self.assertRaises(InvalidHashFormatError, BCrypt.verify, secret, hash[:29])
        self.assertRaises(InvalidHashFormatError, BCrypt.verify, secret, hash[:-1])
        self.assertRaises(InvalidHashFormatError, BCrypt.verify, secret, hash + "x")
        self.assertRaises(InvalidHashFormatError, BCrypt.verify, secret,
                          hash[:-1] + "!")

#=========================================================
#cross-check against pyca bcrypt
#=========================================================
@skipUnless(pybcrypt, "bcrypt package not installed")
class PyBcryptCrossTest(TestCase):
    "test hashes agree with the pyca bcrypt package"

    passwords = [b"", b"a", b"password", b"\xe2\x98\x83", b"x" * 72]

    def test_pybcrypt_verifies_ours(self):
        for secret in self.passwords:
            hash = BCrypt.hash(secret, BCrypt.genconfig(rounds=4, ident="2b"))
            self.assertTrue(pybcrypt.checkpw(secret, hash.encode("ascii")),
                            "secret %r:" % (secret,))

    def test_we_verify_pybcrypt(self):
        for secret in self.passwords:
            hash = pybcrypt.hashpw(secret, pybcrypt.gensalt(4, prefix=b"2a"))
            self.assertTrue(BCrypt.verify(secret, hash), "secret %r:" % (secret,))
            self.assertEqual(BCrypt.hash(secret, hash), hash.decode("ascii"))

#=========================================================
#eof
#=========================================================

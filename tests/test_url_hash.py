import unittest

from labsync.utils.url_hash import normalize_url, hash_submission_url

BASE = "https://www.hackerrank.com/challenges/two-sum/submissions/555"


class TestNormalizeUrl(unittest.TestCase):

    def test_strips_query_fragment_trailing_slash_and_case(self):
        self.assertEqual(
            normalize_url("HTTPS://www.HackerRank.com/challenges/Two-Sum/submissions/555/?a=1#top"),
            BASE
        )

    def test_is_idempotent(self):
        samples = [
            BASE,
            BASE + "/",
            BASE + "?ref=x",
            "https://www.hackerrank.com/",
            "  Some Random Text/  ",
            "https://host:badport/path/",
            "https://x.com/ /",
            "https://x.com/a/ / /",
            "https://user:pw@www.hackerrank.com:8443/challenges/",
            "",
        ]
        for url in samples:
            with self.subTest(url=url):
                once = normalize_url(url)
                self.assertEqual(normalize_url(once), once)

    def test_drops_userinfo_and_default_port(self):
        self.assertEqual(normalize_url("https://x@www.hackerrank.com:443/challenges/two-sum/submissions/555"), BASE)
        self.assertEqual(normalize_url("http://www.hackerrank.com:80/a/"), "http://www.hackerrank.com/a")

    def test_keeps_non_default_port(self):
        self.assertEqual(normalize_url("https://www.hackerrank.com:8443/a"), "https://www.hackerrank.com:8443/a")
        self.assertNotEqual(hash_submission_url("https://www.hackerrank.com:8443/a"),
                            hash_submission_url("https://www.hackerrank.com/a"))

    def test_trailing_whitespace_segments_are_trimmed(self):
        self.assertEqual(normalize_url("https://x.com/ /"), "https://x.com")

    def test_unparseable_falls_back_to_trimmed_lowercase(self):
        self.assertEqual(normalize_url("  Not A URL  "), "not a url")


class TestHashSubmissionUrl(unittest.TestCase):

    def test_equivalent_urls_hash_equally(self):
        variants = [
            BASE,
            BASE + "/",
            BASE + "///",
            BASE + "?isFullScreen=true",
            BASE.upper(),
            "  " + BASE + "  ",
            BASE.replace("https://", "https://x@"),
            BASE.replace("https://", "https://user:secret@"),
            BASE.replace("www.hackerrank.com", "www.hackerrank.com:443"),
            BASE + "/ /",
        ]
        expected = hash_submission_url(BASE)
        for url in variants:
            with self.subTest(url=url):
                self.assertEqual(hash_submission_url(url), expected)

    def test_distinct_urls_hash_differently(self):
        self.assertNotEqual(
            hash_submission_url(BASE),
            hash_submission_url("https://www.hackerrank.com/challenges/two-sum/submissions/556")
        )

    def test_is_sha256_hex(self):
        digest = hash_submission_url(BASE)
        self.assertEqual(len(digest), 64)
        int(digest, 16)


if __name__ == '__main__':
    unittest.main()

"""
Tests for the fuzzy resolution layer.
"""
import random
import string

import pytest
from rapidfuzz.distance import Levenshtein

from tf_aws_docs.config import DocsServerConfig
from tf_aws_docs.models import Document
from tf_aws_docs.resolution import (
    DEFAULT_FIELD_ORDER,
    CandidateBuilder,
    CandidateField,
    DocumentResolver,
    FuzzyMatch,
    ResolutionResult,
    create_document_resolver,
    find_best_match,
    get_scorer,
    levenshtein,
    normalize,
    strip_vendor_file_prefix,
)


def _random_pairs(count: int = 200, seed: int = 7):
    rng = random.Random(seed)
    alphabet = "abc" + string.digits[:2]
    for _ in range(count):
        a = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 8)))
        b = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 8)))
        yield a, b


class TestNormalize:
    """Tests for normalize."""

    def test_lowercases_and_strips_punctuation(self):
        """Test that case and punctuation are dropped."""
        assert normalize("S3 Bucket-Policy!") == "s3bucketpolicy"

    def test_strips_vendor_prefix(self):
        """Test that a leading AWS or Amazon prefix is removed."""
        assert normalize("AWS_Bucket") == normalize("bucket") == "bucket"
        assert normalize("Amazon S3 Bucket") == normalize("S3 Bucket") == "s3bucket"

    def test_vendor_prefix_only_at_start(self):
        """Test that a vendor word later in the value is kept."""
        assert normalize("bucket aws") == "bucketaws"

    def test_title_with_colon_separator(self):
        """Test that the "AWS: aws_instance" title form normalizes to the bare name."""
        assert normalize("AWS: aws_instance") == "instance"

    def test_idempotent(self):
        """Test that normalizing twice changes nothing."""
        samples = ["AWS_Bucket", "aws__aws_x", "Amazon Amazon", "", "---", "EC2 (Elastic Compute Cloud)"]
        for sample in samples:
            once = normalize(sample)
            assert normalize(once) == once

    def test_empty_and_symbol_only_inputs(self):
        """Test that empty and symbol-only values normalize to empty."""
        assert normalize("") == ""
        assert normalize("(*)") == ""

    def test_custom_vendor_prefixes(self):
        """Test that vendor prefixes are configurable."""
        assert normalize("gcp-storage", vendor_prefixes=("gcp",)) == "storage"
        assert normalize("aws-storage", vendor_prefixes=()) == "awsstorage"

    def test_strip_vendor_file_prefix(self):
        """Test that only an aws- or aws_ file prefix is removed."""
        assert strip_vendor_file_prefix("aws_s3_bucket.html.markdown") == "s3_bucket.html.markdown"
        assert strip_vendor_file_prefix("aws-ami") == "ami"
        assert strip_vendor_file_prefix("awsome.html.markdown") == "awsome.html.markdown"


class TestLevenshtein:
    """Tests for the edit-distance scorers."""

    def test_identity_is_zero(self):
        """Test that a string is at distance zero from itself."""
        for value in ["", "a", "s3bucket"]:
            assert levenshtein(value, value) == 0

    def test_empty_string_distance_is_length(self):
        """Test that the distance to an empty string is the length."""
        assert levenshtein("", "abcd") == 4
        assert levenshtein("abc", "") == 3

    def test_known_distances(self):
        """Test known edit distances."""
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("s3bucket", "s3buket") == 1
        assert levenshtein("xyz", "abcdefg") == 7
        # No transpositions: a swap costs two edits
        assert levenshtein("ab", "ba") == 2

    def test_symmetry_and_agreement_with_rapidfuzz(self):
        """Test symmetry and agreement with rapidfuzz on random pairs."""
        for a, b in _random_pairs():
            assert levenshtein(a, b) == levenshtein(b, a)
            assert levenshtein(a, b) == Levenshtein.distance(a, b)

    def test_triangle_inequality(self):
        """Test the triangle inequality on random strings."""
        pairs = list(_random_pairs(60, seed=11))
        for (a, b), (c, _) in zip(pairs, reversed(pairs)):
            assert levenshtein(a, b) <= levenshtein(a, c) + levenshtein(c, b)

    def test_get_scorer(self):
        """Test that scorers are looked up by name."""
        assert get_scorer("levenshtein") is levenshtein
        assert get_scorer("rapidfuzz")("kitten", "sitting") == 3

    def test_get_scorer_unknown(self):
        """Test that an unknown scorer name is rejected."""
        with pytest.raises(ValueError, match="Unknown scorer"):
            get_scorer("jaro")


class TestFindBestMatch:
    """Tests for find_best_match."""

    def test_returns_nearest(self):
        """Test that the nearest candidate and its index are returned."""
        match = find_best_match("s3buket", ["ec2instance", "s3bucket", "s3"], 3)
        assert match == FuzzyMatch(matched_value="s3bucket", index=1, distance=1)

    def test_none_when_all_exceed_threshold(self):
        """Test that no match is returned above the threshold."""
        assert find_best_match("xyz", ["abcdefg"], 3) is None

    def test_distance_equal_to_threshold_is_accepted(self):
        """Test that a distance equal to the threshold matches."""
        match = find_best_match("abc", ["xyz"], 3)
        assert match is not None
        assert match.distance == 3

    def test_first_candidate_wins_ties(self):
        """Test that the lowest index wins on equal distance."""
        match = find_best_match("ab", ["ab", "ab"], 3)
        assert match.index == 0

        match = find_best_match("abc", ["abx", "aby", "abc_"], 3)
        assert match.index == 0
        assert match.distance == 1

    def test_empty_candidates(self):
        """Test that an empty candidate list yields no match."""
        assert find_best_match("abc", [], 3) is None

    def test_no_normalization_applied(self):
        """Test that the selector compares values as given."""
        assert find_best_match("S3", ["s3"], 0) is None

    def test_negative_threshold_rejected(self):
        """Test that a negative threshold is rejected."""
        with pytest.raises(ValueError):
            find_best_match("a", ["a"], -1)


class TestCandidateBuilder:
    """Tests for CandidateBuilder."""

    def test_field_order(self):
        """Test that candidates follow the fixed field order."""
        document = Document(
            identifier="aws_s3_bucket",
            locator="docs/r/s3_bucket.html.markdown",
            category="S3 (Simple Storage)",
            title="AWS: aws_s3_bucket",
            short_description="Provides a S3 bucket resource.",
            long_description="Provides a S3 bucket resource with versioning.",
            headings=("Example Usage", "Versioning"),
            argument_names=("bucket", "force_destroy"),
        )

        candidates = CandidateBuilder().build(document)

        assert candidates == [
            (CandidateField.CATEGORY, "s3simplestorage"),
            (CandidateField.IDENTIFIER, "s3bucket"),
            (CandidateField.TITLE, "s3bucket"),
            (CandidateField.SHORT_DESCRIPTION, "providesas3bucketresource"),
            (CandidateField.LONG_DESCRIPTION, "providesas3bucketresourcewithversioning"),
            (CandidateField.HEADING, "exampleusage"),
            (CandidateField.HEADING, "versioning"),
            (CandidateField.ARGUMENT_NAME, "bucket"),
            (CandidateField.ARGUMENT_NAME, "forcedestroy"),
        ]

    def test_placeholders_and_empty_values_skipped(self):
        """Test that placeholders and empty values are not candidates."""
        document = Document(
            identifier="broken",
            locator="docs/r/broken.html.markdown",
            category="(missing)",
            title="(malformed)",
            short_description="",
            long_description="---",
        )

        candidates = CandidateBuilder().build(document)

        assert candidates == [(CandidateField.IDENTIFIER, "broken")]

    def test_identifier_stem_falls_back_to_identifier(self):
        """Test that the identifier is used when there is no file name."""
        document = Document(identifier="aws_vpc", locator="")
        assert CandidateBuilder().identifier_stem(document) == "aws_vpc"

    def test_custom_field_order(self):
        """Test that a custom scalar field order is honored."""
        document = Document(identifier="x", locator="x.html.markdown", title="Title", category="Cat")
        builder = CandidateBuilder(field_order=(CandidateField.TITLE, CandidateField.CATEGORY))
        assert builder.build(document) == [
            (CandidateField.TITLE, "title"),
            (CandidateField.CATEGORY, "cat"),
        ]

    def test_multi_valued_fields_cannot_be_scalars(self):
        """Test that headings cannot be ordered as scalar fields."""
        with pytest.raises(ValueError):
            CandidateBuilder(field_order=DEFAULT_FIELD_ORDER + (CandidateField.HEADING,))


@pytest.fixture
def corpus():
    return [
        Document(
            identifier="aws_s3_bucket",
            locator="docs/r/s3_bucket.html.markdown",
            category="S3 (Simple Storage)",
            headings=("Versioning",),
            argument_names=("bucket", "force_destroy"),
        ),
        Document(
            identifier="aws_instance",
            locator="docs/r/ec2_instance.html.markdown",
            category="EC2 (Elastic Compute Cloud)",
            headings=("Example Usage",),
            argument_names=("ami", "instance_type", "user_data_replace_on_change"),
        ),
    ]


class TestDocumentResolver:
    """Tests for DocumentResolver."""

    def test_typo_resolves_through_identifier(self, corpus):
        """Test that a typo resolves through the identifier field."""
        result = DocumentResolver().resolve("s3 buket", corpus)

        assert result.is_match
        assert result.identifier == "aws_s3_bucket"
        assert result.locator == "docs/r/s3_bucket.html.markdown"
        assert result.matched_field is CandidateField.IDENTIFIER
        assert result.matched_value == "s3bucket"
        assert result.distance == 1
        assert result.document_index == 0

    def test_argument_name_match(self, corpus):
        """Test that an exact argument name selects its document."""
        result = DocumentResolver().resolve("user_data_replace_on_change", corpus)

        assert result.identifier == "aws_instance"
        assert result.matched_field == "argumentName"
        assert result.distance == 0

    def test_gibberish_not_found(self, corpus):
        """Test that an unrelated query is not found."""
        result = DocumentResolver().resolve("qqqzzzxxx", corpus)

        assert not result.is_match
        assert result == ResolutionResult.not_found("qqqzzzxxx")

    def test_placeholder_category_never_matches(self):
        """Test that a missing category never matches the word missing."""
        corpus = [
            Document(identifier="aws_vpc", locator="docs/d/vpc.html.markdown", category="(missing)"),
        ]
        result = DocumentResolver().resolve("missing", corpus)
        assert not result.is_match

    def test_empty_corpus(self):
        """Test that an empty corpus yields not found."""
        assert not DocumentResolver().resolve("s3", []).is_match

    def test_earlier_document_wins_tie(self):
        """Test that the earlier document wins on equal distance."""
        corpus = [
            Document(identifier="first", locator="one.html.markdown", headings=("Logging",)),
            Document(identifier="second", locator="two.html.markdown", category="Logging"),
        ]
        result = DocumentResolver().resolve("logging", corpus)
        assert result.identifier == "first"
        assert result.matched_field is CandidateField.HEADING

    def test_earlier_field_wins_tie_within_document(self):
        """Test that the earlier field wins within a document."""
        corpus = [
            Document(
                identifier="aws_s3_bucket",
                locator="s3_bucket.html.markdown",
                title="AWS: aws_s3_bucket",
            ),
        ]
        result = DocumentResolver().resolve("s3 bucket", corpus)
        assert result.matched_field is CandidateField.IDENTIFIER

    def test_global_minimum_beats_earlier_document(self):
        """Test that a closer later document beats an earlier match."""
        corpus = [
            Document(identifier="ami", locator="ami.html.markdown"),
            Document(identifier="vpc", locator="vpc.html.markdown"),
        ]
        result = DocumentResolver().resolve("vpc", corpus)
        assert result.identifier == "vpc"
        assert result.distance == 0

    def test_threshold_is_respected(self, corpus):
        """Test that the resolver threshold bounds matches."""
        strict = DocumentResolver(threshold=0)
        assert not strict.resolve("s3 buket", corpus).is_match
        assert strict.resolve("s3 bucket", corpus).is_match

    def test_custom_extractor(self, corpus):
        """Test that a custom candidate extractor is used."""
        only_arguments = lambda document: [
            (CandidateField.ARGUMENT_NAME, normalize(name)) for name in document.argument_names
        ]
        result = DocumentResolver(extractor=only_arguments).resolve("s3 bucket", corpus)
        assert result.identifier == "aws_s3_bucket"
        assert result.matched_field is CandidateField.ARGUMENT_NAME
        assert result.matched_value == "bucket"

    def test_negative_threshold_rejected(self):
        """Test that a negative threshold is rejected."""
        with pytest.raises(ValueError):
            DocumentResolver(threshold=-1)

    def test_to_dict(self, corpus):
        """Test serialization of found and not-found results."""
        payload = DocumentResolver().resolve("s3 buket", corpus).to_dict()
        assert payload == {
            "original_query": "s3 buket",
            "found": True,
            "identifier": "aws_s3_bucket",
            "locator": "docs/r/s3_bucket.html.markdown",
            "distance": 1,
            "matched_field": "identifier",
            "matched_value": "s3bucket",
        }
        assert ResolutionResult.not_found("x").to_dict() == {"original_query": "x", "found": False}


class TestResolverFactory:
    """Tests for create_document_resolver."""

    def test_defaults(self):
        """Test that the factory uses the default threshold."""
        resolver = create_document_resolver()
        assert resolver.threshold == 3

    def test_config_threshold_and_scorer(self, corpus):
        """Test that threshold and scorer come from configuration."""
        config = DocsServerConfig(fuzzy_threshold=1, fuzzy_scorer="rapidfuzz")
        resolver = create_document_resolver(config)

        assert resolver.threshold == 1
        assert resolver.resolve("s3 buket", corpus).identifier == "aws_s3_bucket"
        assert not resolver.resolve("s3 bkt", corpus).is_match

    def test_unknown_scorer(self):
        """Test that an unknown configured scorer is rejected."""
        with pytest.raises(ValueError):
            create_document_resolver(DocsServerConfig(fuzzy_scorer="nope"))

from core.sanitization import (
    normalize_phone,
    sanitize_comment,
    sanitize_profile_field,
    sanitize_title_name,
)


class TestSanitizeComment:
    def test_normal_comment(self):
        assert sanitize_comment("Loved the soundtrack!") == "Loved the soundtrack!"

    def test_removes_control_chars(self):
        assert sanitize_comment("hello\x00world\x1f") == "helloworld"

    def test_keeps_newlines(self):
        assert sanitize_comment("line one\nline two") == "line one\nline two"

    def test_truncates_long_comment(self):
        result = sanitize_comment("a" * 5000)
        assert len(result) == 2003  # 2000 + "..."

    def test_empty_comment(self):
        assert sanitize_comment("") == ""
        assert sanitize_comment(None) == ""


class TestSanitizeTitleName:
    def test_strips_whitespace(self):
        assert sanitize_title_name("  Inception ") == "Inception"

    def test_truncates(self):
        assert len(sanitize_title_name("x" * 300)) == 255

    def test_empty(self):
        assert sanitize_title_name(None) == ""


class TestSanitizeProfileField:
    def test_normal_name(self):
        assert sanitize_profile_field("Alice") == "Alice"

    def test_removes_brackets(self):
        assert sanitize_profile_field("Alice[Admin]") == "AliceAdmin"

    def test_removes_newlines(self):
        assert "\n" not in sanitize_profile_field("Alice\nSmith")

    def test_truncates_long_name(self):
        assert len(sanitize_profile_field("A" * 150)) == 100

    def test_blank_becomes_none(self):
        assert sanitize_profile_field("<>") is None
        assert sanitize_profile_field(None) is None


class TestNormalizePhone:
    def test_groups_digits(self):
        assert normalize_phone("912345678") == "912 345 678"

    def test_partial_number(self):
        assert normalize_phone("9123") == "912 3"

    def test_strips_non_digits_and_caps_length(self):
        assert normalize_phone("(+351) 912-345-678") == "351 912 345"

    def test_empty(self):
        assert normalize_phone("") is None
        assert normalize_phone("abc") is None

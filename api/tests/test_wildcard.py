from autoack.pipeline.wildcard import compile_pattern, matches


def test_leading_wildcard_requires_a_prefix_segment():
    assert matches("mail.example.com", "*.example.com")
    assert not matches("example.com", "*.example.com")
    assert matches("a.b.c", "*.c")


def test_wildcard_spans_at_sign_and_dots():
    assert matches("noreply@gmail.com", "noreply@*")
    assert matches("test.user@domain.fr", "test.*@domain.fr")
    assert matches("x@y.z", "*")
    assert matches("", "*")


def test_match_is_anchored():
    assert not matches("noreply@gmail.com.evil", "noreply@gmail.com")
    assert not matches("xnoreply@gmail.com", "noreply@*")
    assert not matches("mail.example.com.au", "*.example.com")


def test_regex_metacharacters_are_literal():
    assert not matches("exampleXcom", "example.com")
    assert matches("a+b@x.com", "a+b@*")
    assert not matches("aab@x.com", "a+b@*")
    assert matches("(weird)[chars]$^|?.com", "(weird)[chars]$^|?.com")


def test_case_insensitive():
    assert matches("NoReply@Gmail.COM", "noreply@*")
    assert matches("mail.example.com", "*.EXAMPLE.com")


def test_empty_and_multiple_wildcards():
    assert matches("", "")
    assert not matches("x", "")
    assert matches("a.b@c.d", "*.*@*.*")
    assert not matches("ab@cd", "*.*@*")
    assert matches("abc", "**")


def test_compiled_patterns_are_cached():
    assert compile_pattern("*.example.com") is compile_pattern("*.example.com")

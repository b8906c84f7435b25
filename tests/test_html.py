from lab_autograder.processing.html import extract_head, has_stylesheet_link


def test_extract_head_returns_inner_html() -> None:
    html = '<html><HEAD lang="en"><title>x</title></HEAD><body></body></html>'
    assert extract_head(html) == "<title>x</title>"


def test_extract_head_missing() -> None:
    assert extract_head("<html><body></body></html>") == ""


def test_stylesheet_link_attribute_order_and_quotes() -> None:
    assert has_stylesheet_link("<link rel='stylesheet' href='styles.css'>")
    assert has_stylesheet_link('<link href="./styles.css" type="text/css" rel="stylesheet" />')


def test_stylesheet_link_rejects_wrong_rel_or_href() -> None:
    assert not has_stylesheet_link('<link rel="icon" href="styles.css">')
    assert not has_stylesheet_link('<link rel="stylesheet" href="css/styles.css">')
    assert not has_stylesheet_link('<link rel="stylesheet" href="main.css">')


def test_stylesheet_link_custom_href() -> None:
    assert has_stylesheet_link('<link rel="stylesheet" href="main.css">', href="main.css")

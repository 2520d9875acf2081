from __future__ import annotations

import pytest

GOOD_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<title>Acme Widgets Home Page</title>
<meta name="description" content="Acme builds durable, affordable widgets for homes, offices and workshops worldwide.">
<link rel="canonical" href="https://example.com/">
<meta property="og:title" content="Acme">
<meta property="og:description" content="Widgets for everyone">
<meta property="og:image" content="https://example.com/og.png">
<meta name="twitter:card" content="summary_large_image">
</head>
<body>
<h1 id="top">Widgets</h1>
<h2>Range</h2>
<img src="/a.png" alt="A blue widget">
<a href="/about">About us</a>
<a href="https://partner.example" target="_blank" rel="noopener">Partner</a>
</body>
</html>
"""


@pytest.fixture
def good_page() -> str:
    return GOOD_PAGE

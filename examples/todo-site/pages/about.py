metadata = {
    "title": "About",
    "description": "A demo site built with kiln.",
    "opengraph": {"image": "https://example.com/og.png"},
}


def page(props):
    return "<main><h1>About</h1><p>Every page here is a Python module.</p></main>"

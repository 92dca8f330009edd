metadata = {
    "title": "Todos",
    "description": "Everything left to do, one page per item.",
}


def page(props):
    return (
        "<main><h1>Todos</h1><ul>"
        '<li><a href="/todo/1/">Write the landing page</a></li>'
        '<li><a href="/todo/2/">Publish the sitemap</a></li>'
        "</ul></main>"
    )

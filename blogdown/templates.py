"""Starter files written by project initialization."""

from __future__ import annotations

CSS_TEMPLATE = """\
body {
    margin: 0 auto;
    max-width: 48rem;
    padding: 1rem;
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
    line-height: 1.6;
    color: #222;
}

h1,
h2,
h3 {
    line-height: 1.2;
}

pre,
code {
    font-family: "Fira Code", monospace;
    background: #f4f4f4;
}

pre {
    padding: 0.75rem;
    overflow-x: auto;
}

img {
    max-width: 100%;
}
"""

EXAMPLE_POST_TEMPLATE = """\
# Example post

Welcome to your new blog. Posts live in the `posts` directory and are plain
markdown files.

## Formatting

Write *emphasis*, **strong text** and `inline code`, or fenced blocks:

```python
print("hello blog")
```

Images go in the images directory configured in `blogdown.config.json`.
"""

# relative path -> contents
STARTER_FILES = {
    ("css", "style.css"): CSS_TEMPLATE,
    ("posts", "example.md"): EXAMPLE_POST_TEMPLATE,
}

STARTER_DIRECTORIES = ("posts", "css", "js")

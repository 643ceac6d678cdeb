"""Shared fixtures for core unit tests"""

import pytest

from docshift.core.parse import parse_markup, render_html


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""


@pytest.fixture(name="markup")
def markup_fixture():
    """Callable: markdown source -> top-level MarkupNodes via the real renderer."""
    def _markup(md: str):
        return parse_markup(render_html(md))
    return _markup


@pytest.fixture(name="sample_nodes")
def sample_nodes_fixture(markup):
    return markup(SAMPLE_MD)

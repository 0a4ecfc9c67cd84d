"""RFC テンプレートと、その穴埋め。"""

from __future__ import annotations

import re

NAME_PLACEHOLDER = "(fill me in with a unique ident, my_awesome_feature)"
DATE_PLACEHOLDER = "(fill me in with today's date, YYYY-MM-DD)"
EMPTY_PLACEHOLDER = "(leave this empty)"

RFC_PR_TAG = "RFC PR"
IMPLEMENTATION_PR_TAG = "Implementation PR"

DEFAULT_TEMPLATE = f"""\
- Feature Name: {NAME_PLACEHOLDER}
- Start Date: {DATE_PLACEHOLDER}
- {RFC_PR_TAG}: {EMPTY_PLACEHOLDER}
- {IMPLEMENTATION_PR_TAG}: {EMPTY_PLACEHOLDER}

# Summary

One paragraph explanation of the feature.

# Motivation

Why are we doing this? What use cases does it support? What is the expected
outcome?

# Detailed design

This is the bulk of the RFC. Explain the design in enough detail for somebody
familiar with the project to understand, and for somebody familiar with the
code to implement.

# Drawbacks

Why should we *not* do this?

# Alternatives

What other designs have been considered? What is the impact of not doing this?

# Unresolved questions

What parts of the design are still TBD?
"""

_SEPARATORS = re.compile(r"[\s_]+")


def slugify(name: str) -> str:
    """`My awesome_feature` -> `my-awesome-feature`"""

    return _SEPARATORS.sub("-", name.strip().lower())


def fill_template(template: str, *, name: str, date: str) -> str:
    return template.replace(NAME_PLACEHOLDER, name).replace(DATE_PLACEHOLDER, date)


def populate_pr(
    text: str, *, tag: str, pr_id: str, project_name: str, pr_path: str
) -> str:
    """Fill a `- <tag>: (leave this empty)` line with a PR link."""

    link = f"{tag}: [{project_name}#{pr_id}]({pr_path}/{pr_id})"
    return text.replace(f"{tag}: {EMPTY_PLACEHOLDER}", link)

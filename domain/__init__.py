"""Describes the Forkify domain. Centres around the `ApplicationState`.

What does the state hold?

- The open recipe, replaced wholesale on every load or upload.
- The current search and the page the user is looking at.
- The bookmarks, which outlive the process through a blob store.

Fetching and displaying are someone else's job. The recipe API is a
`RecipeSource` and can be faked.
"""

"""
Built-in skills directory.

One directory per skill, each holding a SKILL.md whose front matter
declares ``name`` and ``description``. The directory name matches the
skill name.
"""

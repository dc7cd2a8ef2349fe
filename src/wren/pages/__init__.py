"""Filesystem page creation with incremental reconciliation.

Every page file under the configured root becomes a page; collection
templates become one page per record.  After an initial scan, add and
remove events from the watcher are applied one at a time.

Conventions:

    pages/
      index.py              # /
      about.py              # /about
      _helpers.py           # not a page
      blog/
        index.py            # /blog
        {Post.slug}.py      # /blog/<slug> for every Post record
"""

"""Collection routes — one page per data record.

A file whose path contains ``{Model.field}`` segments is a collection
template.  Its path is parsed into a template, its query is checked for
the collection fragment, and each record's route is derived by
substituting record fields into the template.
"""

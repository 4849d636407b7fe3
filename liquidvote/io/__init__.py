"""Input of vote commands and output of election reports.

The :mod:`liquidvote.io.commands` module reads the line-oriented command
format (``Alice pick Pizza``, ``Bob delegates Alice``) and writes the result
reports; :mod:`liquidvote.io.core` contains the shared machinery.
"""

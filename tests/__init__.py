"""Test suite for the citation network analytics engine.

Unit tests cover the models, the graph index and each analysis component;
integration tests run the concurrent engine, the JSON loader/exporters and
the command line. To run the tests, execute `pytest` from the project root.
"""

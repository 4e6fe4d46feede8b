def test_import() -> None:
    import pseudograph
    from pseudograph import __version__
    assert isinstance(__version__, str)


def test_public_api() -> None:
    from pseudograph import Graph, PseudoCypher, are_equal
    g = Graph.from_pseudo_cypher("(a)-->(b)")
    assert g.node_count == 2
    assert PseudoCypher().parse("") is None
    assert are_equal(g, g)

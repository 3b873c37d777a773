from scalar_aad import analyze_graph, format_graph, get_graph_stats, reachable, topological_order, value


def _scenario(tape):
    a = value(2.0)
    b = value(-3.0)
    c = value(10.0)
    e = a * b
    d = e + c
    f = value(-2.0)
    l = d * f
    return a, b, c, e, d, f, l


def test_topological_order_emits_operands_first(tape):
    a, b, c, e, d, f, l = _scenario(tape)
    order = topological_order(tape, l.index)
    assert order[-1] == l.index
    assert sorted(order) == sorted({a.index, b.index, c.index, e.index, d.index, f.index, l.index})
    pos = {idx: k for k, idx in enumerate(order)}
    for idx in order:
        for p in tape.nodes[idx].parents:
            assert pos[p] < pos[idx]


def test_topological_order_is_depth_first_post_order(tape):
    a, b, c, e, d, f, l = _scenario(tape)
    assert topological_order(tape, l.index) == [
        a.index, b.index, e.index, c.index, d.index, f.index, l.index,
    ]


def test_shared_node_is_emitted_once(tape):
    a = value(3.0)
    b = a * a
    c = b + a
    order = topological_order(tape, c.index)
    assert order == [a.index, b.index, c.index]


def test_leaf_order_is_itself(tape):
    a = value(1.0)
    assert topological_order(tape, a.index) == [a.index]
    assert reachable(tape, a.index) == [a.index]


def test_order_excludes_unreachable_nodes(tape):
    a = value(1.0)
    value(5.0) * 2.0
    y = -a
    assert topological_order(tape, y.index) == [a.index, y.index]


def test_reachable_visits_each_node_once(tape):
    x = value(1.0)
    y = x
    for _ in range(10):
        y = y * 0.5 + y * 0.5
    seen = reachable(tape, y.index)
    assert len(seen) == len(set(seen))
    assert seen[0] == y.index
    assert set(seen) == set(topological_order(tape, y.index))


def test_deep_order_without_recursion(tape):
    x = value(0.0)
    y = x
    for _ in range(30000):
        y = -y
    order = topological_order(tape, y.index)
    assert len(order) == 30001
    assert order[0] == x.index


def test_graph_stats(tape):
    a, b, c, e, d, f, l = _scenario(tape)
    value(99.0)  # not reachable from l
    stats = get_graph_stats(tape, l.index)
    assert stats['nodes'] == 7
    assert stats['edges'] == 6
    assert stats['leaves'] == 4
    assert stats['max_fan_in'] == 2
    assert stats['operations'] == {'leaf': 4, 'mul': 2, 'add': 1}
    whole = get_graph_stats(tape)
    assert whole['nodes'] == 8
    assert whole['leaves'] == 5


def test_graph_stats_counts_shared_fan_out(tape):
    a = value(2.0)
    y = a * a + a
    stats = get_graph_stats(tape, y.index)
    assert stats['max_fan_out'] == 3


def test_empty_reports(tape):
    assert get_graph_stats(tape)['nodes'] == 0
    assert analyze_graph(tape) == "Empty computation graph"
    assert format_graph(tape) == "Empty graph"


def test_text_reports(tape):
    a, b, c, e, d, f, l = _scenario(tape)
    report = analyze_graph(tape, l.index)
    assert "Total nodes: 7" in report
    assert "leaf" in report

    text = format_graph(tape, l.index, max_nodes=5)
    lines = text.splitlines()
    assert lines[0].startswith("Node    0: leaf")
    assert "[leaf/input]" in lines[0]
    assert "<- [Node0, Node1]" in lines[3]
    assert lines[-1] == "... (2 more nodes)"

from garden_sim.simulation.events import NotificationLog


def test_history_and_stack_are_newest_first():
    log = NotificationLog()
    first = log.emit("A", "first")
    second = log.emit("B", "second")
    assert second == first + 1
    assert [n.title for n in log.history] == ["B", "A"]
    assert [n.title for n in log.stack] == ["B", "A"]
    assert log.current.title == "B"


def test_dismiss_pops_and_runs_callback():
    log = NotificationLog()
    calls = []
    log.emit("A", "first", on_dismiss=lambda: calls.append("A"))
    log.emit("B", "second")
    assert log.dismiss().title == "B"
    assert calls == []
    assert log.dismiss().title == "A"
    assert calls == ["A"]
    assert log.dismiss() is None


def test_dismiss_callback_can_chain_the_next_notification():
    log = NotificationLog()
    log.emit("Tip", "read me", on_dismiss=lambda: log.emit("Follow-up", "next"))
    log.dismiss()
    assert log.current.title == "Follow-up"
    assert len(log.history) == 2


def test_open_history_marks_everything_read():
    log = NotificationLog()
    log.emit("A", "a")
    log.emit("B", "b")
    assert log.unread_count == 2
    log.open_history()
    assert log.unread_count == 0
    assert all(not n.is_new for n in log.history)


def test_duplicate_title_is_logged_but_not_shown_twice():
    log = NotificationLog()
    log.emit("Sem Espaço!", "full", kind="no_space")
    log.emit("Sem Espaço!", "full", kind="no_space")
    assert len(log.history) == 2
    assert len(log.stack) == 1
    assert log.count("no_space") == 2
    log.dismiss()
    log.emit("Sem Espaço!", "full", kind="no_space")
    assert len(log.stack) == 1

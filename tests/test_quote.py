import io
import json
import threading

import pytest

from quotaday.quote import MAX_QUOTES, Quotation, QuoteBook, QuoteBookError


class _ErrorWriter:
    def write(self, data):
        raise BrokenPipeError("io: read/write on closed pipe")


def test_new_quote_book_is_empty():
    qb = QuoteBook()
    assert len(qb) == 0


def test_add_quote_and_get_quote():
    qb = QuoteBook()
    q = Quotation(quote="Hello", author="World")
    qb.add_quote(q)
    assert qb.get_quote(0) == q


def test_add_quote_full_book():
    qb = QuoteBook()
    for _ in range(MAX_QUOTES + 1):
        qb.add_quote(Quotation("Q", "A"))
    assert len(qb) == MAX_QUOTES + 1
    with pytest.raises(QuoteBookError, match="full"):
        qb.add_quote(Quotation("Q", "A"))
    assert len(qb) == MAX_QUOTES + 1


def test_get_quote_errors():
    qb = QuoteBook()
    with pytest.raises(QuoteBookError, match="empty QuoteBook"):
        qb.get_quote(0)
    qb.add_quote(Quotation("A", "B"))
    with pytest.raises(QuoteBookError, match="id 2 out of bounds"):
        qb.get_quote(2)


def test_get_quote_negative_is_out_of_bounds():
    qb = QuoteBook()
    qb.add_quote(Quotation("A", "B"))
    with pytest.raises(QuoteBookError, match="out of bounds"):
        qb.get_quote(-1)


def test_random_quotation():
    qb = QuoteBook()
    with pytest.raises(QuoteBookError):
        qb.random_quotation()
    qb.fill_example()
    got = qb.random_quotation()
    assert got in [qb.get_quote(i) for i in range(len(qb))]


def test_fill_example_contents():
    qb = QuoteBook()
    qb.fill_example()
    assert len(qb) == 6
    assert qb.get_quote(1) == Quotation("Eat the frog first.", "Brian Tracy")


def test_write_html():
    q = Quotation(quote="HTML", author="Tester")
    buf = io.StringIO()
    q.write_html(buf)
    output = buf.getvalue()
    assert "HTML" in output
    assert "<html>" in output
    assert "<p><i>Tester</i></p>" in output


def test_write_html_error_writer():
    with pytest.raises(BrokenPipeError):
        Quotation("X", "Y").write_html(_ErrorWriter())


def test_write_json_round_trip():
    q = Quotation(quote="JSON", author="Tester")
    buf = io.StringIO()
    q.write_json(buf)
    assert buf.getvalue().endswith("\n")
    assert Quotation.from_dict(json.loads(buf.getvalue())) == q


def test_write_json_error_writer():
    with pytest.raises(BrokenPipeError):
        Quotation().write_json(_ErrorWriter())


def test_from_dict_case_insensitive_and_defaults():
    assert Quotation.from_dict({"quote": "x", "AUTHOR": "y"}) == Quotation("x", "y")
    assert Quotation.from_dict({"other": 1}) == Quotation("", "")
    assert Quotation.from_dict({"Quote": None}) == Quotation("", "")


@pytest.mark.parametrize("data", [[1, 2], "text", {"Quote": 5}])
def test_from_dict_rejects_bad_input(data):
    with pytest.raises(ValueError):
        Quotation.from_dict(data)


def test_concurrent_add_quote():
    qb = QuoteBook()
    results = []
    lock = threading.Lock()

    def worker():
        try:
            qb.add_quote(Quotation("Q", "A"))
            outcome = True
        except QuoteBookError:
            outcome = False
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(MAX_QUOTES + 2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count(True) == MAX_QUOTES + 1
    assert results.count(False) == 1
    assert len(qb) == MAX_QUOTES + 1
    stored = [qb.get_quote(i) for i in range(len(qb))]
    assert stored == [Quotation("Q", "A")] * (MAX_QUOTES + 1)
    with pytest.raises(QuoteBookError, match="out of bounds"):
        qb.get_quote(MAX_QUOTES + 1)


def test_concurrent_random_and_add():
    qb = QuoteBook()
    qb.fill_example()
    random_errors = []

    def reader():
        try:
            qb.random_quotation()
        except QuoteBookError as exc:
            random_errors.append(exc)

    def writer():
        try:
            qb.add_quote(Quotation("C", "D"))
        except QuoteBookError:
            pass

    threads = []
    for _ in range(20):
        threads.append(threading.Thread(target=reader))
        threads.append(threading.Thread(target=writer))
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert random_errors == []
    assert len(qb) == MAX_QUOTES + 1
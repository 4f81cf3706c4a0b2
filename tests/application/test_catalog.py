from lexideck.application.catalog import make_item_id, parse_catalog_csv


def test_item_id_is_stable():
    assert make_item_id("สวัสดี", "Bonjour") == make_item_id("สวัสดี", "Bonjour")
    assert len(make_item_id("a", "b")) == 16


def test_item_id_distinguishes_near_duplicates():
    assert make_item_id("ab", "c") != make_item_id("a", "bc")
    assert make_item_id("Bonjour", "x") != make_item_id("bonjour", "x")


def test_parse_skips_header_and_maps_columns():
    items = parse_catalog_csv("French,Thai\nBonjour,สวัสดี\nMerci,ขอบคุณ\n")

    assert [i.front for i in items] == ["สวัสดี", "ขอบคุณ"]
    assert [i.back for i in items] == ["Bonjour", "Merci"]
    assert items[0].id == make_item_id("สวัสดี", "Bonjour")


def test_parse_custom_columns():
    items = parse_catalog_csv("Front,Back,Notes\ncat,chat,animal\n", front_column=0, back_column=1)
    assert (items[0].front, items[0].back) == ("cat", "chat")


def test_parse_handles_quoted_commas_and_crlf():
    text = 'French,Thai\r\n"Bonjour, monde",สวัสดีชาวโลก\r\n"Il a dit ""oui""",เขาพูดว่าใช่\r\n'
    items = parse_catalog_csv(text)

    assert items[0].back == "Bonjour, monde"
    assert items[1].back == 'Il a dit "oui"'


def test_parse_skips_blank_short_and_incomplete_rows():
    text = "French,Thai\n\nlonely\n ,ไม่\nNon, \nOui,ใช่\n   \n"
    items = parse_catalog_csv(text)

    assert len(items) == 1
    assert items[0].back == "Oui"


def test_parse_strips_whitespace_and_bom():
    items = parse_catalog_csv("\ufeffFrench,Thai\n  Merci ,  ขอบคุณ \n")
    assert (items[0].front, items[0].back) == ("ขอบคุณ", "Merci")


def test_parse_deduplicates_keeping_first():
    text = "French,Thai\nOui,ใช่\nNon,ไม่\nOui,ใช่\n"
    items = parse_catalog_csv(text)

    assert [i.back for i in items] == ["Oui", "Non"]
    assert len({i.id for i in items}) == 2


def test_parse_header_only():
    assert parse_catalog_csv("French,Thai\n") == []
    assert parse_catalog_csv("") == []

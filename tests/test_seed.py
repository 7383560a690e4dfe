from scripts.seed import DEMO_OFFERS, seed_offers

from offermap.ingest.offers import query_aggregates


def test_seed_offers_feeds_the_default_threshold(engine):
    inserted = seed_offers(engine)
    assert inserted == sum(DEMO_OFFERS.values())
    entries = query_aggregates(engine, 10)
    assert [(e.key, e.count) for e in entries] == [
        ("wpw10321304", 17),
        ("w10295370a", 12),
        ("da9707365g", 11),
    ]
    assert all(e.last_seen is not None for e in entries)

from __future__ import annotations

from menu_bridge.core.models_menu import Listing, MenuScope, NativeAItem, Viewer
from menu_bridge.services.menu.reconciler import MenuReconciler, humanize_key, is_reconciling
from menu_bridge.tests.menu_helpers import (
    CountingProbe,
    keys,
    labels,
    make_config,
    make_sources,
    route_item,
    url_item,
    viewer,
)

DASHBOARD = NativeAItem(key="dashboard", label="Dashboard", url="https://site.test/account/dashboard/", order=10)


def _scenario_reconciler() -> MenuReconciler:
    return MenuReconciler(make_sources([DASHBOARD], [("orders", "Orders")]))


def _scenario_config():
    return make_config({0: url_item("Help", "https://example.com/help", position=0)})


def test_scenario_listing_a() -> None:
    items = _scenario_reconciler().reconcile_a(_scenario_config(), Viewer.anonymous())

    assert [item.as_dict() for item in items[:2]] == [
        {"label": "Help", "url": "https://example.com/help"},
        {"label": "Dashboard", "url": "https://site.test/account/dashboard/"},
    ]
    assert [(item.key, item.order) for item in items] == [
        ("custom-0", 0),
        ("dashboard", 10),
        ("orders", 50),
    ]


def test_scenario_listing_b() -> None:
    items = _scenario_reconciler().reconcile_b(_scenario_config(), Viewer.anonymous())

    assert keys(items) == ["custom-0", "dashboard", "orders"]
    assert items[0].as_dict() == {"label": "Help", "url": "https://example.com/help"}
    assert items[-1].as_dict() == {"label": "Orders", "url": "https://site.test/my-account/orders/"}


def test_reconciliation_is_deterministic() -> None:
    reconciler = _scenario_reconciler()
    config = _scenario_config()
    first = reconciler.reconcile_a(config, viewer("customer"))
    assert reconciler.reconcile_a(config, viewer("customer")) == first
    first_b = reconciler.reconcile_b(config, viewer("customer"))
    assert reconciler.reconcile_b(config, viewer("customer")) == first_b


def test_ties_keep_visitation_order() -> None:
    reconciler = MenuReconciler(
        make_sources(
            [NativeAItem(key="first", label="First", url="https://site.test/first/", order=50)],
            [("orders", "Orders")],
        )
    )
    config = make_config({0: url_item("Custom", "https://example.com/c", position=50)})

    assert keys(reconciler.reconcile_a(config, Viewer.anonymous())) == ["first", "custom-0", "orders"]


def test_default_sentinel_for_native_a_without_hint() -> None:
    reconciler = MenuReconciler(
        make_sources(
            [
                NativeAItem(key="late", label="Late", url="https://site.test/late/"),
                NativeAItem(key="early", label="Early", url="https://site.test/early/", order=5),
            ]
        )
    )
    items = reconciler.reconcile_a(make_config(), Viewer.anonymous())
    assert [(item.key, item.order) for item in items] == [("early", 5), ("late", 999)]


def test_native_a_label_and_route_fallbacks() -> None:
    reconciler = MenuReconciler(
        make_sources(
            [
                NativeAItem(key="user_account", route="user_account_page", order=1),
                NativeAItem(key="broken", label="Broken", route="unknown_page", order=2),
                NativeAItem(key="empty", label="Empty", order=3),
            ]
        )
    )
    items = reconciler.reconcile_a(make_config(), Viewer.anonymous())
    assert [item.as_dict() for item in items] == [
        {"label": "User Account", "url": "https://site.test/account/"},
    ]


def test_humanize_key_keeps_inner_case() -> None:
    assert humanize_key("edit_myURL") == "Edit MyURL"


def test_scope_exclusivity() -> None:
    reconciler = MenuReconciler(make_sources())
    config = make_config(
        {
            0: url_item("Only A", "https://example.com/a", scope=MenuScope.A_ONLY),
            1: url_item("Only B", "https://example.com/b", scope=MenuScope.B_ONLY),
            2: url_item("Both", "https://example.com/both", scope=MenuScope.BOTH),
        }
    )
    assert labels(reconciler.reconcile_a(config, Viewer.anonymous())) == ["Only A", "Both"]
    assert labels(reconciler.reconcile_b(config, Viewer.anonymous())) == ["Only B", "Both"]


def test_zero_position_takes_the_custom_counter() -> None:
    reconciler = MenuReconciler(make_sources())
    config = make_config(
        {
            3: url_item("Third", "https://example.com/3"),
            1: url_item("First", "https://example.com/1", position=0),
            2: url_item("Second", "https://example.com/2"),
        }
    )
    items = reconciler.reconcile_a(config, Viewer.anonymous())
    assert [(item.key, item.order) for item in items] == [
        ("custom-3", 0),
        ("custom-1", 10),
        ("custom-2", 20),
    ]


def test_positive_position_wins_over_counter() -> None:
    reconciler = MenuReconciler(make_sources())
    config = make_config(
        {
            0: url_item("Hinted", "https://example.com/h", position=5),
            1: url_item("Zero", "https://example.com/z", position=0),
        }
    )
    items = reconciler.reconcile_a(config, Viewer.anonymous())
    assert [(item.key, item.order) for item in items] == [("custom-0", 5), ("custom-1", 10)]


def test_counter_skips_rejected_items() -> None:
    reconciler = MenuReconciler(make_sources())
    config = make_config(
        {
            0: url_item("Private", "https://example.com/p", roles=["vendor"]),
            1: url_item("Public", "https://example.com/q"),
        }
    )
    items = reconciler.reconcile_a(config, viewer("customer"))
    assert [(item.key, item.order) for item in items] == [("custom-1", 0)]


def test_custom_keys_follow_configuration_index() -> None:
    reconciler = MenuReconciler(make_sources())
    config = make_config(
        {
            7: url_item("Seven", "https://example.com/7"),
            2: url_item("Two", "https://example.com/2"),
        }
    )
    assert keys(reconciler.reconcile_b(config, Viewer.anonymous())) == ["custom-7", "custom-2"]


def test_access_filtering_and_admin_override() -> None:
    reconciler = MenuReconciler(make_sources())
    config = make_config(
        {
            0: url_item("Editors", "https://example.com/e", roles=["editor"]),
            1: url_item("Admins", "https://example.com/a", roles=["administrator"]),
            2: url_item("Everyone", "https://example.com/all"),
        }
    )
    assert labels(reconciler.reconcile_a(config, viewer("administrator"))) == ["Editors", "Admins", "Everyone"]
    assert labels(reconciler.reconcile_a(config, viewer("editor"))) == ["Editors", "Everyone"]
    assert labels(reconciler.reconcile_a(config, Viewer.anonymous())) == ["Everyone"]


def test_route_failure_omits_item_from_both_listings() -> None:
    reconciler = MenuReconciler(make_sources(vendors={1: 9}))
    config = make_config({0: route_item("My shop", "vendor_view_page")})

    for listing in (Listing.A, Listing.B):
        assert reconciler.reconcile(listing, config, viewer("customer", user_id=2)) == []
    vendor_items = reconciler.reconcile_b(config, viewer("vendor", user_id=1))
    assert [item.as_dict() for item in vendor_items] == [
        {"label": "My shop", "url": "https://site.test/vendor/9/"},
    ]


def test_suppressed_b_items_never_listed() -> None:
    reconciler = MenuReconciler(
        make_sources(b_items=[("orders", "Orders"), ("downloads", "Downloads"), ("edit-account", "Account")])
    )
    config = make_config(
        {0: url_item("Orders elsewhere", "https://example.com/orders")},
        suppressed=["downloads"],
    )
    for listing in (Listing.A, Listing.B):
        items = reconciler.reconcile(listing, config, Viewer.anonymous())
        assert "downloads" not in keys(items)
    b_items = reconciler.reconcile_b(config, Viewer.anonymous())
    assert [(item.key, item.order) for item in b_items] == [
        ("custom-0", 0),
        ("orders", 50),
        ("edit-account", 60),
    ]


def test_native_a_wins_key_collision() -> None:
    reconciler = MenuReconciler(
        make_sources(
            [NativeAItem(key="dashboard", label="Account home", url="https://site.test/account/")],
            [("dashboard", "Dashboard"), ("orders", "Orders")],
        )
    )
    config = make_config()

    a_items = reconciler.reconcile_a(config, Viewer.anonymous())
    assert [(item.key, item.label, item.order) for item in a_items] == [
        ("orders", "Orders", 50),
        ("dashboard", "Account home", 999),
    ]

    b_items = reconciler.reconcile_b(config, Viewer.anonymous())
    assert [(item.key, item.label, item.order) for item in b_items] == [
        ("dashboard", "Account home", 10),
        ("orders", "Orders", 60),
    ]


def test_b_items_without_url_are_dropped() -> None:
    reconciler = MenuReconciler(make_sources(b_items=[("orders", "Orders")], b_urls={"orders": ""}))
    assert reconciler.reconcile_b(make_config(), Viewer.anonymous()) == []


def test_echoed_custom_item_out_of_scope_is_removed() -> None:
    reconciler = MenuReconciler(
        make_sources(b_items=[("custom-1", "Only B"), ("orders", "Orders")])
    )
    config = make_config({1: url_item("Only B", "https://example.com/b", scope=MenuScope.B_ONLY)})

    assert keys(reconciler.reconcile_a(config, Viewer.anonymous())) == ["orders"]
    assert keys(reconciler.reconcile_b(config, Viewer.anonymous())) == ["custom-1", "orders"]


def test_echoed_custom_item_in_scope_keeps_its_own_entry() -> None:
    reconciler = MenuReconciler(make_sources(b_items=[("orders", "Orders"), ("custom-0", "Help")]))
    config = make_config({0: url_item("Help", "https://example.com/help", position=5)})

    items = reconciler.reconcile_a(config, Viewer.anonymous())
    assert [(item.key, item.url, item.order) for item in items] == [
        ("custom-0", "https://example.com/help", 5),
        ("orders", "https://site.test/my-account/orders/", 50),
    ]


def test_malformed_custom_entry_is_skipped() -> None:
    reconciler = MenuReconciler(make_sources())
    config = make_config(
        {
            0: url_item("", "https://example.com/blank-label"),
            1: url_item("No URL", ""),
            2: url_item("Fine", "https://example.com/fine"),
        }
    )
    assert labels(reconciler.reconcile_a(config, Viewer.anonymous())) == ["Fine"]


def test_reentrant_reconciliation_from_probe_returns_empty_listing() -> None:
    nested: list = []
    config = make_config({0: url_item("Help", "https://example.com/help")})
    probe = CountingProbe([DASHBOARD])
    reconciler = MenuReconciler(make_sources(a_probe=probe))

    def _hook() -> None:
        nested.append(reconciler.reconcile_a(config, Viewer.anonymous()))

    probe.hook = _hook
    items = reconciler.reconcile_a(config, Viewer.anonymous())

    assert nested == [[]]
    assert probe.calls == 1
    assert keys(items) == ["custom-0", "dashboard"]
    assert is_reconciling(Listing.A) is False


def test_other_listing_can_be_built_inside_a_probe() -> None:
    nested: list = []
    config = make_config({0: url_item("Help", "https://example.com/help")})
    probe = CountingProbe([DASHBOARD])
    reconciler = MenuReconciler(make_sources(a_probe=probe))

    def _hook() -> None:
        if is_reconciling(Listing.A) and not is_reconciling(Listing.B):
            nested.append(keys(reconciler.reconcile_b(config, Viewer.anonymous())))

    probe.hook = _hook
    reconciler.reconcile_a(config, Viewer.anonymous())

    assert nested == [["custom-0", "dashboard"]]
    assert probe.calls == 2

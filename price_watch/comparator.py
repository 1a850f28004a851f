"""Best-price comparison: which items got cheaper, and what the new best set is."""

from dataclasses import dataclass

from price_watch.models import Item


@dataclass
class Reconciliation:
    """Outcome of comparing a snapshot with the stored best prices."""

    improved: list[Item]
    best: list[Item]


def improved_items(latest: list[Item], prior_best: list[Item]) -> list[Item]:
    """
    Return the items in `latest` that beat their recorded best price.

    A code with no recorded best is always an improvement. Otherwise the
    latest price must be strictly lower. Order follows `latest`.
    """
    best_by_code = {item.code: item for item in prior_best}
    improved: list[Item] = []
    for item in latest:
        best = best_by_code.get(item.code)
        if best is None or item.price < best.price:
            improved.append(item.clone())
    return improved


def next_best_set(
    improved: list[Item],
    prior_best: list[Item],
    append_new: bool = True,
) -> list[Item]:
    """
    Build the best-price set after applying `improved`.

    The first run (empty `prior_best`) starts from `improved` as-is.
    Otherwise every prior record is kept in its order, with the price lowered
    where `improved` has the same code; the prior name is kept. Codes not yet
    in `prior_best` are appended when `append_new` is set, dropped otherwise.
    """
    if not prior_best:
        return [item.clone() for item in improved]

    improved_by_code = {item.code: item for item in improved}
    best: list[Item] = []
    for record in prior_best:
        better = improved_by_code.get(record.code)
        if better is not None:
            best.append(record.with_price(better.price))
        else:
            best.append(record.clone())

    if append_new:
        known = {record.code for record in prior_best}
        best.extend(item.clone() for item in improved if item.code not in known)

    return best


def reconcile(
    latest: list[Item],
    prior_best: list[Item],
    append_new: bool = True,
) -> Reconciliation:
    """Run both comparison steps for one check cycle."""
    improved = improved_items(latest, prior_best)
    best = next_best_set(improved, prior_best, append_new=append_new)
    return Reconciliation(improved=improved, best=best)

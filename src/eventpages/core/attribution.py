"""
Attribution of contributing networks.

Maps product sources to contributor names so headers can credit them.
"""

from markupsafe import Markup

from eventpages.catalog import Product

CONTRIBUTORS: dict[str, str] = {
    "ak": "Alaska Earthquake Center",
    "at": "National Tsunami Warning Center",
    "ci": "California Integrated Seismic Network: Southern California Seismic Network",
    "hv": "Hawaiian Volcano Observatory",
    "mb": "Montana Bureau of Mines and Geology",
    "nc": "California Integrated Seismic Network: Northern California Seismic System",
    "nn": "Nevada Seismological Laboratory",
    "pr": "Puerto Rico Seismic Network",
    "pt": "Pacific Tsunami Warning Center",
    "uu": "University of Utah Seismograph Stations",
    "us": "USGS National Earthquake Information Center, PDE",
    "uw": "Pacific Northwest Seismic Network",
}


def register_contributor(code: str, name: str) -> None:
    CONTRIBUTORS[code.lower()] = name


def get_contributor_markup(code: str) -> Markup:
    name = CONTRIBUTORS.get(code.lower())
    if name is None:
        return Markup("{}").format(code.upper())
    return Markup('<abbr title="{}">{}</abbr>').format(name, code.upper())


def get_product_attribution(product: Product) -> Markup:
    """
    Attribution markup for a product.

    Credits the product source and, when different, the network that
    produced the origin ("origin-source" property).
    """
    sources = [product.source.lower()]
    origin_source = product.get_property("origin-source")
    if origin_source and origin_source.lower() not in sources:
        sources.append(origin_source.lower())
    return Markup(", ").join(get_contributor_markup(source) for source in sources)

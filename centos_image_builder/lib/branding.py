from __future__ import annotations

MOTD_TEMPLATE = """\
   __        .                   .
 _|  |_      | .-. .  . .-. :--. |-
|_    _|     ;|   ||  |(.-' |  | |
  |__|   `--'  `-' `;-| `-' '  ' `-'
                   /  ;  Instance ({name} {build_date})
                   `-'   {docs_url}

"""

PRODUCT_TEMPLATE = """\
Name: {vendor} Instance
Image: {name} {build_date}
Documentation: {docs_url}
Description: {description}
"""


def render_motd(*, name: str, build_date: str, docs_url: str) -> str:
    return MOTD_TEMPLATE.format(name=name, build_date=build_date, docs_url=docs_url)


def render_product(
    *,
    vendor: str,
    name: str,
    build_date: str,
    docs_url: str,
    description: str,
) -> str:
    return PRODUCT_TEMPLATE.format(
        vendor=vendor,
        name=name,
        build_date=build_date,
        docs_url=docs_url,
        description=description,
    )

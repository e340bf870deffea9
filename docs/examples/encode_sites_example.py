"""
# Site Encoding Example

An example of publishing the locations of a few points of presence as routing communities,
and reading them back on the receiving side.
"""


def main():
    from astrolabe import package_root

    """
    First, we load the sites from a file.
    The astrolabe package ships a small sample of sites that we can use for demonstration.

    Let's take a look at the file to see what astrolabe expects:
    """

    import pandas as pd

    df = pd.read_csv(package_root() / "resources/sites/sample_sites.csv")
    print(df.head())

    """
    Each site has a WGS84 latitude and longitude in decimal degrees and an altitude in meters.
    The altitude column is optional; sites without one are placed at sea level.

    Now, let's build a site table from the same file, using the site name as the identifier:
    """

    from astrolabe.constructs.sites import SiteTable

    sites = SiteTable.from_csv(
        package_root() / "resources/sites/sample_sites.csv",
        index_column="site",
    )

    """
    Encoding the table gives three community codes per site.
    Each code lands in its own range, so a receiver can tell them apart from the value alone:
    """

    encoded = sites.encode()
    print(encoded)

    """
    The codes are the numeric half of a community. Attaching them to our ASN is up to us:
    """

    from astrolabe.codec.position import encode_coordinate

    for coord in sites.coords:
        communities = encode_coordinate(coord)
        print(coord.coordinate_id, communities.to_communities(64512))

    """
    On the receiving side, each payload can be decoded on its own.
    The result always says which coordinate it holds:
    """

    from astrolabe.codec.classifier import decode_community

    for code in encoded.loc["sfo-pop1"]:
        print(decode_community(int(code)).describe())

    """
    Payloads that fall between the defined ranges are rejected rather than guessed at:
    """

    from astrolabe.utils.exceptions import UnclassifiableCode

    try:
        decode_community("650000000")
    except UnclassifiableCode as e:
        print(e)

    """
    Finally, a whole table of received codes can be turned back into sites:
    """

    received = SiteTable.from_communities(encoded)
    print(received.to_dataframe())


if __name__ == "__main__":
    main()

SERIES_QUERY = """
query SeriesList($first: Int!, $titleId: ID!) {
  allSeries(
    first: $first
    filter: { titleId: $titleId, types: [ESPORTS] }
    orderBy: StartTimeScheduled
    orderDirection: DESC
  ) {
    edges {
      node {
        id
        startTimeScheduled
        title { id nameShortened }
        teams { baseInfo { id name logoUrl } }
        tournament { id name }
      }
    }
  }
}
"""

# Reduced shape for schemas that reject the type filter or explicit ordering.
# Only issued after the primary query comes back with a 400.
SERIES_FALLBACK_QUERY = """
query SeriesListLite($first: Int!, $titleId: ID!) {
  allSeries(
    first: $first
    filter: { titleId: $titleId }
  ) {
    edges {
      node {
        id
        startTimeScheduled
        title { id nameShortened }
        teams { baseInfo { id name logoUrl } }
        tournament { id name }
      }
    }
  }
}
"""

"""GraphQL documents sent to the balance index."""

BALANCES_QUERY = """
query Balances($first: Int!, $after: String, $threshold: BigInt) {
  accountsConnection(
    first: $first
    after: $after
    orderBy: total_DESC
    where: { free_gt: $threshold }
  ) {
    edges {
      node {
        id
        total
        free
        reserved
      }
    }
    totalCount
    pageInfo {
      endCursor
      hasNextPage
    }
  }
}
"""

__all__ = ["BALANCES_QUERY"]

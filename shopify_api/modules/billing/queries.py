"""Admin GraphQL documents used by the billing operations."""

from .constants import PURCHASES_PAGE_SIZE

APP_SUBSCRIPTION_FIELDS = """
  id
  name
  test
  status
  createdAt
  currentPeriodEnd
  trialDays
"""

ONE_TIME_PURCHASE_FIELDS = """
  id
  name
  test
  status
  createdAt
"""

ACTIVE_SUBSCRIPTIONS_QUERY = f"""
query appActiveSubscriptions {{
  currentAppInstallation {{
    activeSubscriptions {{
      {APP_SUBSCRIPTION_FIELDS}
    }}
  }}
}}
"""

ONE_TIME_PURCHASES_QUERY = f"""
query appOneTimePurchases($endCursor: String) {{
  currentAppInstallation {{
    oneTimePurchases(first: {PURCHASES_PAGE_SIZE}, sortKey: CREATED_AT, after: $endCursor) {{
      edges {{
        node {{
          {ONE_TIME_PURCHASE_FIELDS}
        }}
      }}
      pageInfo {{
        hasNextPage
        endCursor
      }}
    }}
  }}
}}
"""

# Aliased so responses read the same as the unpaginated active list
SUBSCRIPTIONS_QUERY = f"""
query appSubscriptions($endCursor: String) {{
  currentAppInstallation {{
    activeSubscriptions: allSubscriptions(first: {PURCHASES_PAGE_SIZE}, sortKey: CREATED_AT, after: $endCursor) {{
      edges {{
        node {{
          {APP_SUBSCRIPTION_FIELDS}
        }}
      }}
      pageInfo {{
        hasNextPage
        endCursor
      }}
    }}
  }}
}}
"""

CANCEL_SUBSCRIPTION_MUTATION = f"""
mutation appSubscriptionCancel($id: ID!, $prorate: Boolean) {{
  appSubscriptionCancel(id: $id, prorate: $prorate) {{
    appSubscription {{
      {APP_SUBSCRIPTION_FIELDS}
    }}
    userErrors {{
      field
      message
    }}
  }}
}}
"""

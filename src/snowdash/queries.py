"""Fixed TPC-H statements behind the dashboard charts.

All statements are literals with no user-controlled input, since the
query layer performs no parameter binding. Column aliases are upper case
because Snowflake reports unquoted identifiers that way, and the records
keep those names verbatim.
"""

from pydantic import BaseModel

TPCH = "SNOWFLAKE_SAMPLE_DATA.TPCH_SF1"


class RevenueByRegion(BaseModel):
    REGION: str
    REVENUE: float


class OrdersByMonth(BaseModel):
    YEAR: int
    MONTH: int
    ORDER_COUNT: int
    TOTAL_PRICE: float


class CustomerBySegment(BaseModel):
    C_MKTSEGMENT: str
    CUSTOMER_COUNT: int
    AVG_BALANCE: float


REVENUE_BY_REGION = f"""
    SELECT
        R.R_NAME AS REGION,
        SUM(L.L_EXTENDEDPRICE * (1 - L.L_DISCOUNT)) AS REVENUE
    FROM {TPCH}.LINEITEM L
    JOIN {TPCH}.ORDERS O ON L.L_ORDERKEY = O.O_ORDERKEY
    JOIN {TPCH}.CUSTOMER C ON O.O_CUSTKEY = C.C_CUSTKEY
    JOIN {TPCH}.NATION N ON C.C_NATIONKEY = N.N_NATIONKEY
    JOIN {TPCH}.REGION R ON N.N_REGIONKEY = R.R_REGIONKEY
    GROUP BY R.R_NAME
    ORDER BY REVENUE DESC
"""

ORDERS_BY_MONTH = f"""
    SELECT
        YEAR(O_ORDERDATE) AS YEAR,
        MONTH(O_ORDERDATE) AS MONTH,
        COUNT(*) AS ORDER_COUNT,
        SUM(O_TOTALPRICE) AS TOTAL_PRICE
    FROM {TPCH}.ORDERS
    GROUP BY YEAR(O_ORDERDATE), MONTH(O_ORDERDATE)
    ORDER BY YEAR, MONTH
"""

CUSTOMERS_BY_SEGMENT = f"""
    SELECT
        C_MKTSEGMENT,
        COUNT(*) AS CUSTOMER_COUNT,
        AVG(C_ACCTBAL) AS AVG_BALANCE
    FROM {TPCH}.CUSTOMER
    GROUP BY C_MKTSEGMENT
    ORDER BY CUSTOMER_COUNT DESC
"""

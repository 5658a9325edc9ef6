"""
orders_export – Main entry point.

Runs the orders export once: fetch the OData collection, write orders.csv.
"""

from actions.export_orders import main


if __name__ == "__main__":
    main()

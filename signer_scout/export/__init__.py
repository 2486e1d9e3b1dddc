from signer_scout.export.csv_writer import DELIMITER, format_addresses, write_addresses

__all__ = ["DELIMITER", "format_addresses", "write_addresses"]

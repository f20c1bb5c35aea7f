"""
Single-purpose async functions over the ERC20 and Metapool contracts.
"""

"""
S3 upload relay: accepts one multipart file over HTTP and stores it in S3.
"""

from bucket_acl.remote.authority import Grant, RemoteAuthority

__all__ = ["Grant", "RemoteAuthority"]

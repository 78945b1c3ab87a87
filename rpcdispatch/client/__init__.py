from rpcdispatch.client.client import RpcClient, RpcFaultError

__all__ = ["RpcClient", "RpcFaultError"]

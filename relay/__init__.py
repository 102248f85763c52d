from relay.relay import ChatRelay, build_contents

__all__ = ["ChatRelay", "build_contents"]

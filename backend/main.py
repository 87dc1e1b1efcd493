import os

import uvicorn

if __name__ == "__main__":
    # 开发环境自动重载，通过 RELOAD=false 关闭
    is_dev = os.getenv("RELOAD", "true").lower() == "true"

    uvicorn.run(
        "bizdash.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=is_dev,
        log_level="info"
    )

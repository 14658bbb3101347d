from denonce.main import app

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("denonce.main:app", host="0.0.0.0", port=8000)

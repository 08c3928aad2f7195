#!/usr/bin/env python3
"""
Product Catalog Ingestion Script

Loads an Amazon-style product export into the ChromaDB collection used by
the chat assistant. Prices such as "₹1,099" are parsed to numbers, the
comma-joined review columns are split into review records, and every
product is tagged with the category and brand the intent classifier would
recognise in its name.

Usage:
    python scripts/ingest_catalog.py <products_csv> [--reset]

Expected columns:
    product_id, product_name, category, discounted_price, actual_price,
    rating, rating_count, about_product, user_name, review_title,
    review_content
"""

import json
import re
import sys
import time

import pandas as pd
from dotenv import load_dotenv

from shopassist.application.intent.extractors import extract_brand_name, extract_category

# Load environment variables
load_dotenv()

REQUIRED_COLUMNS = ("product_id", "product_name", "discounted_price")
BATCH_SIZE = 500


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def clean_text(text):
    """Clean and normalize text fields"""
    if pd.isna(text) or text == '':
        return None

    text = str(text).strip()
    return text or None


def parse_number(value):
    """Convert "₹1,099" or "4.2" style values to float, None if not possible"""
    text = clean_text(value)
    if text is None:
        return None

    try:
        return float(re.sub(r"[₹,\s]", "", text))
    except ValueError:
        return None


def parse_count(value):
    """Convert "24,269" style counts to int, 0 if not possible"""
    text = clean_text(value)
    if text is None:
        return 0

    try:
        return int(float(text.replace(",", "")))
    except ValueError:
        return 0


def split_reviews(row):
    """Zip the comma-joined reviewer, title and content columns into records"""
    names = (clean_text(row.get("user_name")) or "").split(",")
    titles = (clean_text(row.get("review_title")) or "").split(",")
    contents = (clean_text(row.get("review_content")) or "").split(",")

    reviews = []
    for i, content in enumerate(contents):
        content = content.strip()
        if not content:
            continue
        reviews.append({
            "user_name": names[i].strip() if i < len(names) and names[i].strip() else "Anonymous",
            "title": titles[i].strip() if i < len(titles) else "",
            "content": content,
        })
    return reviews


def build_record(row):
    """
    Build one Chroma record from a CSV row.

    Returns:
        (id, document, metadata) tuple, or None when the row is unusable
    """
    product_id = clean_text(row.get("product_id"))
    title = clean_text(row.get("product_name"))
    price = parse_number(row.get("discounted_price"))
    if not product_id or not title or price is None:
        return None

    mrp = parse_number(row.get("actual_price")) or price
    category = extract_category(title)
    brand = extract_brand_name(title)

    metadata = {
        "product_id": product_id,
        "title": title,
        "category": category.value if category else "other",
        "source_category": clean_text(row.get("category")) or "",
        "brand": brand.split()[0].lower() if brand else "",
        "price": price,
        "mrp": mrp,
        "rating": parse_number(row.get("rating")) or 0.0,
        "rating_count": parse_count(row.get("rating_count")),
    }
    document = json.dumps({
        "title": title,
        "about": clean_text(row.get("about_product")) or "",
        "reviews": split_reviews(row),
    }, ensure_ascii=False)

    return product_id, document, metadata


def build_records(df):
    """Build records for every usable row, skipping duplicates by product_id"""
    records = {}
    skipped = 0
    for _, row in df.iterrows():
        record = build_record(row)
        if record is None:
            skipped += 1
            continue
        records.setdefault(record[0], record)
    return list(records.values()), skipped


def ingest(records, reset=False):
    """Upsert records into the configured collection in batches"""
    import chromadb
    from chromadb.utils import embedding_functions
    from shopassist.config.settings import settings

    client = chromadb.PersistentClient(path=settings.chroma_db_dir)
    if reset:
        try:
            client.delete_collection(settings.collection_name)
            print(f"✓ Dropped collection '{settings.collection_name}'")
        except Exception:
            print(f"Collection '{settings.collection_name}' did not exist, nothing to reset")

    collection = client.get_or_create_collection(
        name=settings.collection_name,
        embedding_function=embedding_functions.SentenceTransformerEmbeddingFunction(
            model_name=settings.embedding_model
        ),
    )

    for start in range(0, len(records), BATCH_SIZE):
        batch = records[start:start + BATCH_SIZE]
        collection.upsert(
            ids=[r[0] for r in batch],
            documents=[r[1] for r in batch],
            metadatas=[r[2] for r in batch],
        )
        print(f"  Upserted {start + len(batch)}/{len(records)}")

    return collection.count()


def main(input_csv, reset=False):
    start_time = time.time()
    print(f"Reading input CSV: {input_csv}")

    df = None
    for encoding in ("utf-8", "latin-1"):
        try:
            df = pd.read_csv(input_csv, encoding=encoding)
            print(f"✓ Successfully read with {encoding} encoding")
            break
        except UnicodeDecodeError:
            continue

    if df is None:
        print("❌ Could not read CSV with any supported encoding")
        return 1

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        print(f"❌ Missing required columns: {', '.join(missing)}")
        return 1

    records, skipped = build_records(df)
    print(f"✓ Built {len(records)} records ({skipped} rows skipped)")

    total = ingest(records, reset=reset)
    print(f"\n✅ Collection now holds {total} products ({time.time() - start_time:.2f}s)")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/ingest_catalog.py <products_csv> [--reset]")
        sys.exit(1)

    sys.exit(main(sys.argv[1], reset="--reset" in sys.argv))
